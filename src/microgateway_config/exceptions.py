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

"""Custom exceptions for microgateway-config."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Category of a broken configuration rule."""

    TYPE = "type"
    RANGE = "range"
    MISSING = "missing"
    CONSISTENCY = "consistency"


class MicrogatewayConfigError(Exception):
    """Base exception for all microgateway-config errors."""

    ERROR_CATEGORY = "GENERAL"
    ERROR_CODE = "MGC_0000"

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.user_message = user_message or "An error occurred"
        self.error_code = error_code or self.ERROR_CODE
        self.error_category = self.ERROR_CATEGORY
        self.context = context or {}
        self.recovery_suggestion = recovery_suggestion
        self.timestamp = datetime.now(timezone.utc)


class ConfigValidationError(MicrogatewayConfigError):
    """A gateway configuration field violated a rule.

    Carries the dotted field path (``config.<section>.<field>``) and the
    kind of rule that failed. The message is the operator-facing text.
    """

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "MGC_1000"
    ERROR_CODES = {
        ErrorKind.TYPE: "MGC_1001",
        ErrorKind.RANGE: "MGC_1002",
        ErrorKind.MISSING: "MGC_1003",
        ErrorKind.CONSISTENCY: "MGC_1004",
    }

    def __init__(self, message: str, kind: ErrorKind, path: str) -> None:
        super().__init__(
            message,
            user_message=message,
            error_code=self.ERROR_CODES.get(kind, self.ERROR_CODE),
            context={"kind": kind.value, "path": path},
            recovery_suggestion=f"Fix {path} in the gateway configuration and restart",
        )
        self.kind = kind
        self.path = path


class ConfigFileError(MicrogatewayConfigError):
    """A gateway configuration file could not be read or parsed."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "MGC_2000"

    def __init__(self, path: str, reason: str, original_error: Exception | None = None) -> None:
        context = {"path": path}
        if original_error:
            context["original_error"] = str(original_error)
        super().__init__(
            f"Cannot load configuration file {path}: {reason}",
            user_message=f"Configuration file {path} is unreadable",
            context=context,
            recovery_suggestion="Check the file path, permissions and YAML/JSON syntax",
        )
        self.path = path
        self.reason = reason
        self.original_error = original_error


class SettingsError(MicrogatewayConfigError):
    """The package's own runtime settings are invalid."""

    ERROR_CATEGORY = "SERVER_ERROR"
    ERROR_CODE = "MGC_4000"
