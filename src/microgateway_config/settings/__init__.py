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

"""Runtime settings for microgateway-config.

- Environment variable support with MGC_ prefix
- Type validation and conversion
- Sensible defaults for all configurable values
- Settings file support (JSON/YAML)
- Cross-field settings validation
"""

from .defaults import DEFAULT_SETTINGS
from .manager import ConfigManager, settings
from .schema import LoggingSettings, RedisSettings, SettingsSchema, ValidatorSettings
from .validation import SettingsValidationError, SettingsValidator

__all__ = [
    "DEFAULT_SETTINGS",
    "ConfigManager",
    "LoggingSettings",
    "RedisSettings",
    "SettingsSchema",
    "SettingsValidationError",
    "SettingsValidator",
    "ValidatorSettings",
    "settings",
]
