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

"""Value kinds at the configuration boundary.

A merged gateway configuration comes from YAML, the environment and
defaults, so any field may be missing, ``None`` or of an unexpected type.
Rules inspect the kind of a field rather than trusting its Python type.
"""

from collections.abc import Mapping
from enum import Enum
from numbers import Real
from typing import Any


class ValueKind(str, Enum):
    """Shape of a single configuration value."""

    ABSENT = "absent"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    OTHER = "other"


def classify(value: Any) -> ValueKind:
    """Return the kind of a value that is known to be present."""
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, test it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, Real):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.OTHER


def kind_of(section: Mapping[str, Any], key: str) -> ValueKind:
    """Return the kind of ``section[key]``, or ABSENT when the key is missing."""
    if key not in section:
        return ValueKind.ABSENT
    return classify(section[key])


def is_defined(kind: ValueKind) -> bool:
    return kind not in (ValueKind.ABSENT, ValueKind.NULL)
