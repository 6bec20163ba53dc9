# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Lenient scalar coercion applied to raw values before structural validation.

This pass never raises. Values it cannot convert are returned unchanged so
that the strict pass (:mod:`typed_extconf.mapping.tree_mapper`) is the single
place that reports type mismatches.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

TRUE_STRINGS: frozenset[str] = frozenset({"1", "true", "yes", "on"})
FALSE_STRINGS: frozenset[str] = frozenset({"0", "false", "no", "off", ""})

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


class ScalarKind(str, Enum):
    """Semantic kind of a declared field type."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    ARRAY = "array"
    NESTED = "nested"
    OPAQUE = "opaque"

    @property
    def is_scalar(self) -> bool:
        return self in (ScalarKind.STRING, ScalarKind.INT, ScalarKind.FLOAT, ScalarKind.BOOL)


def is_number(value: Any) -> bool:
    """Real numbers only; ``bool`` is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_numeric(value: Any) -> bool:
    """True for numbers and for strings spelling a decimal or exponent number."""
    if is_number(value):
        return True
    return isinstance(value, str) and _NUMERIC_RE.match(value) is not None


def is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def to_bool(value: Any) -> bool:
    """Classify ``value`` as true or false.

    Strings in TRUE_STRINGS/FALSE_STRINGS are matched case-insensitively;
    any other value uses Python truthiness.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_STRINGS:
            return True
        if normalized in FALSE_STRINGS:
            return False
    return bool(value)


def _to_int(value: Any) -> Any:
    if isinstance(value, str):
        if not is_numeric(value):
            return value
        try:
            return int(Decimal(value.strip()))
        except (InvalidOperation, ValueError, OverflowError):
            return value
    if is_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return int(value)
    return value


def _to_float(value: Any) -> Any:
    if isinstance(value, str):
        return float(value) if is_numeric(value) else value
    if is_number(value):
        return float(value)
    return value


def _to_string(value: Any) -> Any:
    if isinstance(value, bool):
        # Booleans keep the "1"/"0" spelling used by the legacy stores.
        return "1" if value else "0"
    if is_scalar(value):
        return str(value)
    return value


def coerce(value: Any, kind: ScalarKind) -> Any:
    """Convert a present raw value toward ``kind``.

    Arrays, nested and opaque kinds pass through untouched.
    """
    if kind is ScalarKind.BOOL:
        return to_bool(value)
    if kind is ScalarKind.INT:
        return _to_int(value)
    if kind is ScalarKind.FLOAT:
        return _to_float(value)
    if kind is ScalarKind.STRING:
        return _to_string(value)
    return value
