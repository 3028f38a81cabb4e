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

"""Settings schema definitions for microgateway-config.

These models describe the package's own runtime settings (key-value store
connection, validator deployment constants, logging). They are unrelated to
the gateway configuration that the validator inspects.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RedisSettings(BaseModel):
    """Default connection parameters for the key-value client."""

    host: str = Field(default="127.0.0.1", min_length=1, description="Redis host name")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis TCP port")
    db: int = Field(default=0, ge=0, description="Redis logical database index")
    password: str | None = Field(default=None, description="Redis AUTH password")
    socket_timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        le=300.0,
        description="Socket timeout for store operations; None waits indefinitely",
    )
    decode_responses: bool = Field(
        default=True,
        description="Return stored values as str instead of bytes",
    )


class ValidatorSettings(BaseModel):
    """Deployment constants used by the gateway configuration validator."""

    min_refresh_interval: int = Field(
        default=3_600_000,
        ge=1,
        description="Minimum edge_config refresh/retry interval (one hour in milliseconds)",
    )
    no_rule_match_actions: list[str] = Field(
        default_factory=lambda: ["allow", "deny", "log"],
        min_length=1,
        description="Accepted values for accesscontrol.noRuleMatchAction (case-insensitive)",
    )
    proxy_env_vars: list[str] = Field(
        default_factory=lambda: ["HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy"],
        description="Environment variables consulted, in order, for a proxy URL",
    )

    @field_validator("no_rule_match_actions")
    @classmethod
    def validate_actions(cls, v):
        """Reject blank action names."""
        cleaned = [action.strip() for action in v]
        if any(not action for action in cleaned):
            raise ValueError("no_rule_match_actions must not contain blank entries")
        return cleaned


class LoggingSettings(BaseModel):
    """Logging setup applied by the command line entry point."""

    level: str = Field(
        default="WARNING",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging.Formatter format string",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v


class SettingsSchema(BaseModel):
    """Complete settings schema for microgateway-config."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    redis: RedisSettings = Field(
        default_factory=RedisSettings,
        description="Key-value store connection defaults",
    )

    validator: ValidatorSettings = Field(
        default_factory=ValidatorSettings,
        description="Gateway configuration validator constants",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging setup",
    )

    # Environment-specific settings
    environment: str = Field(
        default="production",
        pattern="^(development|staging|production)$",
        description="Environment mode for settings profiles",
    )

    debug_mode: bool = Field(default=False, description="Enable debug mode with additional logging")

    settings_version: str = Field(default="1.0.0", description="Settings schema version")
