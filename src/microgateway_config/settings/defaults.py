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

"""Default settings values for microgateway-config.

The defaults let the validator and key-value client work without any
environment variable or settings file.
"""

from typing import Any

from .schema import SettingsSchema

# Default settings instance
DEFAULT_SETTINGS = SettingsSchema()

# Environment variable mapping for easy reference
ENV_VAR_MAPPING = {
    # Key-value store
    "MGC_REDIS_HOST": "redis.host",
    "MGC_REDIS_PORT": "redis.port",
    "MGC_REDIS_DB": "redis.db",
    "MGC_REDIS_PASSWORD": "redis.password",
    "MGC_REDIS_SOCKET_TIMEOUT_SECONDS": "redis.socket_timeout_seconds",
    "MGC_REDIS_DECODE_RESPONSES": "redis.decode_responses",
    # Validator constants
    "MGC_MIN_REFRESH_INTERVAL": "validator.min_refresh_interval",
    "MGC_NO_RULE_MATCH_ACTIONS": "validator.no_rule_match_actions",
    "MGC_PROXY_ENV_VARS": "validator.proxy_env_vars",
    # Logging
    "MGC_LOG_LEVEL": "logging.level",
    "MGC_LOG_FORMAT": "logging.format",
    # Environment settings
    "MGC_ENVIRONMENT": "environment",
    "MGC_DEBUG_MODE": "debug_mode",
    "MGC_SETTINGS_VERSION": "settings_version",
}

# Type mapping for environment variable conversion
ENV_VAR_TYPES: dict[str, type] = {
    # Integer types
    "MGC_REDIS_PORT": int,
    "MGC_REDIS_DB": int,
    "MGC_MIN_REFRESH_INTERVAL": int,
    # Float types
    "MGC_REDIS_SOCKET_TIMEOUT_SECONDS": float,
    # Boolean types
    "MGC_REDIS_DECODE_RESPONSES": bool,
    "MGC_DEBUG_MODE": bool,
    # Comma-separated list types
    "MGC_NO_RULE_MATCH_ACTIONS": list,
    "MGC_PROXY_ENV_VARS": list,
    # String types (default)
    "MGC_REDIS_HOST": str,
    "MGC_REDIS_PASSWORD": str,
    "MGC_LOG_LEVEL": str,
    "MGC_LOG_FORMAT": str,
    "MGC_ENVIRONMENT": str,
    "MGC_SETTINGS_VERSION": str,
}

# Settings profiles for different environments
ENVIRONMENT_PROFILES: dict[str, dict[str, Any]] = {
    "development": {
        "debug_mode": True,
        "logging.level": "DEBUG",
    },
    "staging": {
        "debug_mode": False,
        "logging.level": "INFO",
    },
    "production": {
        "debug_mode": False,
    },
}


def get_profile_overrides(environment: str) -> dict[str, Any]:
    """Get settings overrides for a specific environment profile."""
    return ENVIRONMENT_PROFILES.get(environment, {})
