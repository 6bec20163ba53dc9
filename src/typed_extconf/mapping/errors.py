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
"""Field-level mapping failures and their aggregation."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import ValidationError

from typed_extconf.kernel.exceptions import SchemaValidationException

if TYPE_CHECKING:
    from typed_extconf.mapping.schema import TargetType


class MappingErrorKind(str, Enum):
    MISSING_REQUIRED = "missing_required"
    TYPE_CONVERSION = "type_conversion"
    TARGET_NOT_INSTANTIABLE = "target_not_instantiable"
    MAPPING_LIBRARY = "mapping_library"


@dataclass(frozen=True)
class MappingError:
    """One failure at one lookup path.

    ``field`` is the constructor location (``nested_config.priority``) and
    ``path`` the lookup path in the raw tree (``nested.priority``).
    """

    path: str
    message: str
    kind: MappingErrorKind = MappingErrorKind.TYPE_CONVERSION
    field: str = ""
    error_type: str = ""

    def describe(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


_CONVERSION_ERROR_PREFIXES = (
    "int_", "float_", "bool_", "string_", "list_", "tuple_", "set_", "frozen_set_",
    "dict_", "dataclass_", "model_", "none_", "decimal_", "enum", "literal_", "is_instance_",
)


def _kind_of(error_type: str) -> MappingErrorKind:
    if error_type == "missing":
        return MappingErrorKind.MISSING_REQUIRED
    if error_type.startswith(_CONVERSION_ERROR_PREFIXES):
        return MappingErrorKind.TYPE_CONVERSION
    return MappingErrorKind.MAPPING_LIBRARY


class ErrorAggregator:
    """Collects every failure of one structural pass into a single exception."""

    def __init__(self, target: TargetType) -> None:
        self._target = target
        self._errors: list[MappingError] = []

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[MappingError]:
        return iter(self._errors)

    @property
    def errors(self) -> list[MappingError]:
        return list(self._errors)

    def add(self, error: MappingError) -> None:
        self._errors.append(error)

    def add_validation_error(self, exc: ValidationError) -> None:
        """Flatten a pydantic ``ValidationError`` into path-qualified errors."""
        for entry in exc.errors():
            location = tuple(entry["loc"])
            self._errors.append(
                MappingError(
                    path=self._target.lookup_path_for(location) or self._target.name,
                    message=entry["msg"],
                    kind=_kind_of(entry["type"]),
                    field=".".join(str(part) for part in location),
                    error_type=entry["type"],
                )
            )

    def to_exception(self, subject: str | None = None) -> SchemaValidationException:
        return SchemaValidationException(subject or f'"{self._target.name}"', self._errors)
