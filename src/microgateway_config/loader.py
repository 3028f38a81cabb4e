# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Read a gateway configuration file into a plain mapping.

Only parsing happens here. Merging with defaults and the environment is the
gateway bootstrap's job.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigFileError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Parse a YAML or JSON gateway configuration file.

    Files ending in ``.json`` are parsed as JSON, everything else as YAML.
    An empty file yields an empty mapping.

    Args:
        path: Location of the configuration file

    Returns:
        The parsed configuration

    Raises:
        ConfigFileError: If the file cannot be read, cannot be parsed, or
            does not contain a mapping at the top level
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(str(config_path), e.strerror or str(e), e) from e

    try:
        if config_path.suffix == ".json":
            data = json.loads(text) if text.strip() else None
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigFileError(str(config_path), "invalid syntax", e) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigFileError(str(config_path), "top level is not a mapping")

    logger.debug("Loaded gateway configuration from %s", config_path)
    return data
