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

"""Settings validation utilities for microgateway-config.

Cross-field checks on the package settings that a single pydantic field
constraint cannot express, plus advisory warnings and recommendations.
"""

from typing import Any

from pydantic import ValidationError

from ..exceptions import SettingsError
from .schema import SettingsSchema

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


class SettingsValidationError(SettingsError):
    """Settings validation error with detailed context."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, user_message="Invalid microgateway-config settings")
        self.errors = errors or []


class SettingsValidator:
    """Cross-field settings validator with warnings and recommendations."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.recommendations: list[str] = []

    def validate_settings(self, settings: SettingsSchema) -> None:
        """Perform validation of settings.

        Args:
            settings: Settings to validate

        Raises:
            SettingsValidationError: If validation fails
        """
        self.warnings.clear()
        self.recommendations.clear()

        try:
            # Re-run field validation on the current values
            SettingsSchema.model_validate(settings.model_dump())

            self._validate_cross_field_constraints(settings)
            self._validate_security_constraints(settings)

        except ValidationError as e:
            raise SettingsValidationError(
                "Settings validation failed",
                [dict(error) for error in e.errors()],
            ) from e

    def _validate_cross_field_constraints(self, settings: SettingsSchema) -> None:
        """Validate constraints that span multiple settings fields."""
        actions = [action.lower() for action in settings.validator.no_rule_match_actions]
        if len(set(actions)) != len(actions):
            raise SettingsValidationError(
                "validator.no_rule_match_actions contains duplicate entries "
                f"({', '.join(settings.validator.no_rule_match_actions)})",
            )

        if len(set(settings.validator.proxy_env_vars)) != len(settings.validator.proxy_env_vars):
            self.warnings.append("validator.proxy_env_vars lists the same variable more than once")

        if settings.validator.min_refresh_interval < 60_000:
            self.warnings.append(
                f"Minimum refresh interval ({settings.validator.min_refresh_interval}) is below "
                "one minute. Gateway intervals are expressed in milliseconds.",
            )

    def _validate_security_constraints(self, settings: SettingsSchema) -> None:
        """Validate security-related settings."""
        if settings.redis.host not in _LOCAL_HOSTS and not settings.redis.password:
            self.recommendations.append(
                f"Redis host {settings.redis.host} is remote and no password is set. "
                "Consider enabling AUTH.",
            )

        if settings.environment == "production" and settings.debug_mode:
            self.warnings.append(
                "Debug mode is enabled in production environment. "
                "This may expose sensitive information.",
            )

    def get_validation_summary(self) -> dict[str, Any]:
        """Get summary of validation results including warnings and recommendations."""
        return {
            "status": "valid",
            "warnings": self.warnings,
            "recommendations": self.recommendations,
            "warning_count": len(self.warnings),
            "recommendation_count": len(self.recommendations),
        }
