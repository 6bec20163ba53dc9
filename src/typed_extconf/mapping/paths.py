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
"""Dot-notation lookup into raw configuration trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

PATH_DELIMITER: Final = "."


class _Absent:
    """Sentinel for "no value at this path"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()


def resolve_path(tree: Mapping[str, Any], path: str) -> Any:
    """Return the value stored at ``path`` in ``tree``, or ``ABSENT``.

    A path without delimiter is a plain top-level lookup. Otherwise every
    segment but the last must name a nested mapping. ``None`` values collapse
    to ``ABSENT``. Never raises.
    """
    if PATH_DELIMITER not in path:
        value = tree.get(path) if isinstance(tree, Mapping) else None
        return ABSENT if value is None else value

    current: Any = tree
    for segment in path.split(PATH_DELIMITER):
        if not isinstance(current, Mapping) or segment not in current:
            return ABSENT
        current = current[segment]

    return ABSENT if current is None else current


def is_absent(value: Any) -> bool:
    return value is ABSENT
