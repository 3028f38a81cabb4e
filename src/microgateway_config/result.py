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

"""Explicit validation results.

``check()`` returns one of these instead of raising, so callers can branch
on the outcome without exception handling.
"""

from dataclasses import dataclass

from .exceptions import ConfigValidationError, ErrorKind


@dataclass(frozen=True)
class Ok:
    """The configuration passed every rule."""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """The first rule the configuration violated."""

    kind: ErrorKind
    path: str
    message: str

    def __bool__(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, exc: ConfigValidationError) -> "Err":
        return cls(kind=exc.kind, path=exc.path, message=str(exc))

    def to_exception(self) -> ConfigValidationError:
        return ConfigValidationError(self.message, self.kind, self.path)


ValidationResult = Ok | Err

OK = Ok()
