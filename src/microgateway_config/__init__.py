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

"""Validate gateway configurations and hold a Redis-backed key-value client.

    from microgateway_config import validate

    validate(config)  # raises ConfigValidationError on the first bad field
"""

import logging

from .exceptions import (
    ConfigFileError,
    ConfigValidationError,
    ErrorKind,
    MicrogatewayConfigError,
    SettingsError,
)
from .loader import load_config_file
from .redis_client import RedisClient
from .result import OK, Err, Ok, ValidationResult
from .validator import ConfigValidator, check, validate
from .values import ValueKind, classify, kind_of

__all__ = [
    "OK",
    "ConfigFileError",
    "ConfigValidationError",
    "ConfigValidator",
    "Err",
    "ErrorKind",
    "MicrogatewayConfigError",
    "Ok",
    "RedisClient",
    "SettingsError",
    "ValidationResult",
    "ValueKind",
    "check",
    "classify",
    "kind_of",
    "load_config_file",
    "validate",
]

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
