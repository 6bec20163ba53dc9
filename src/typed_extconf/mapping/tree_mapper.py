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
"""Strict structural mapping of prepared values onto configuration classes.

Backed by pydantic: the prepared dict is validated against the class's real
declared types. Superfluous keys are ignored. Every violation is reported,
not just the first one.

pydantic's lax mode reads ``True``/``False`` as ``1``/``0`` for numeric
fields; the structural pass reports those as type mismatches instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from typed_extconf.kernel.exceptions import TargetNotInstantiableError
from typed_extconf.mapping.coercion import ScalarKind
from typed_extconf.mapping.errors import ErrorAggregator, MappingError
from typed_extconf.mapping.schema import TargetType, describe, resolve_metadata

T = TypeVar("T")

_NUMERIC_TYPE_ERRORS: dict[ScalarKind, tuple[str, str]] = {
    ScalarKind.INT: ("int_type", "Input should be a valid integer"),
    ScalarKind.FLOAT: ("float_type", "Input should be a valid number"),
}


def _check_numeric_bools(
    target: TargetType,
    data: Mapping[str, Any],
    aggregator: ErrorAggregator,
    location: tuple[str, ...] = (),
) -> None:
    for descriptor in target:
        if descriptor.key not in data:
            continue
        value = data[descriptor.key]
        field_location = (*location, descriptor.key)
        if descriptor.kind in _NUMERIC_TYPE_ERRORS and isinstance(value, bool):
            error_type, message = _NUMERIC_TYPE_ERRORS[descriptor.kind]
            aggregator.add(
                MappingError(
                    path=resolve_metadata(descriptor).lookup_path,
                    message=message,
                    field=".".join(field_location),
                    error_type=error_type,
                )
            )
        elif descriptor.nested is not None and isinstance(value, Mapping):
            _check_numeric_bools(describe(descriptor.nested), value, aggregator, field_location)


class TreeMapper:
    """Validate and construct configuration instances from plain dicts.

    Type adapters are built lazily and reused for the lifetime of the mapper.
    """

    def __init__(self) -> None:
        self._adapters: dict[type, TypeAdapter[Any]] = {}

    def _adapter(self, cls: type[T]) -> TypeAdapter[T]:
        adapter = self._adapters.get(cls)
        if adapter is None:
            try:
                adapter = TypeAdapter(cls)
            except PydanticUserError as exc:
                raise TargetNotInstantiableError(cls, str(exc)) from exc
            self._adapters[cls] = adapter
        return adapter

    def map(self, cls: type[T], data: Mapping[str, Any], subject: str | None = None) -> T:
        """Build an instance of ``cls`` from ``data``.

        Fields missing from ``data`` take the class's own declared default.

        Raises:
            TargetNotInstantiableError: pydantic cannot build a schema for ``cls``.
            SchemaValidationException: one or more values do not fit their field
                types; carries every offending path.
        """
        target = describe(cls)
        adapter = self._adapter(cls)
        aggregator = ErrorAggregator(target)
        _check_numeric_bools(target, data, aggregator)
        try:
            instance = adapter.validate_python(dict(data))
        except ValidationError as exc:
            aggregator.add_validation_error(exc)
            raise aggregator.to_exception(subject) from exc
        if aggregator:
            raise aggregator.to_exception(subject)
        return instance


class TreeMapperFactory:
    """Creates independent :class:`TreeMapper` instances."""

    def create(self) -> TreeMapper:
        return TreeMapper()
