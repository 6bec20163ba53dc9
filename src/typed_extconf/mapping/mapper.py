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
"""Configuration mapper: raw untyped trees to typed configuration instances.

Mapping runs in two passes:

1. *Preparation* walks the declared fields in order. Each field's lookup
   path is resolved against the raw tree; present values go through the
   lenient coercer, absent ones fall back to the required check, the
   declared default, or a nested configuration object prepared from the
   **same** raw tree. The first missing required field stops the walk.
2. *Structural mapping* validates the prepared values against the real
   field types (:class:`~typed_extconf.mapping.tree_mapper.TreeMapper`) and
   reports every violation at once. Fields that fall back to their default
   are left out, so the class applies the declared default itself, unconverted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

from typed_extconf.kernel.exceptions import (
    MissingRequiredFieldError,
    SchemaValidationException,
    TargetNotInstantiableError,
    TypedExtConfException,
)
from typed_extconf.mapping.coercion import coerce
from typed_extconf.mapping.errors import MappingError, MappingErrorKind
from typed_extconf.mapping.paths import ABSENT, resolve_path
from typed_extconf.mapping.schema import FieldDescriptor, FieldMetadata, TargetType, describe, resolve_metadata
from typed_extconf.mapping.tree_mapper import TreeMapper, TreeMapperFactory

T = TypeVar("T")

logger = structlog.get_logger("typed_extconf.mapping")


@dataclass(frozen=True)
class _Defaulted:
    metadata: FieldMetadata


@dataclass(frozen=True)
class MappingResult(Generic[T]):
    """Outcome of one mapping call: an instance or the error that prevented it."""

    value: T | None = None
    error: TypedExtConfException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the instance, raising the recorded error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> MappingResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: TypedExtConfException) -> MappingResult[T]:
        return cls(error=error)


class ConfigurationMapper:
    """Populate configuration classes from raw configuration trees.

    Stateless apart from the tree mapper's adapter cache; a single instance
    can be shared between threads.
    """

    def __init__(self, tree_mapper: TreeMapper | None = None) -> None:
        self._tree_mapper = tree_mapper or TreeMapperFactory().create()

    # ------------------------------------------------------------------
    # Preparation pass
    # ------------------------------------------------------------------

    def _resolve_field(
        self, descriptor: FieldDescriptor, tree: Mapping[str, Any], keep_defaults: bool
    ) -> Any | MappingError:
        metadata = resolve_metadata(descriptor)
        raw = resolve_path(tree, metadata.lookup_path)

        if raw is not ABSENT:
            value = coerce(raw, descriptor.kind) if descriptor.kind.is_scalar else raw
            logger.debug("field_resolved", field=descriptor.name, path=metadata.lookup_path, kind=descriptor.kind.value)
            return value

        if metadata.required:
            return MappingError(
                path=metadata.lookup_path,
                message=f'Required configuration key "{metadata.lookup_path}" is missing',
                kind=MappingErrorKind.MISSING_REQUIRED,
                field=descriptor.name,
            )

        if metadata.has_default:
            logger.debug("field_defaulted", field=descriptor.name, path=metadata.lookup_path)
            return _Defaulted(metadata)

        if descriptor.nested is not None:
            logger.debug("nested_field_mapped", field=descriptor.name, nested=descriptor.nested.__qualname__)
            return self._prepare(describe(descriptor.nested), tree, keep_defaults)

        return None

    def _prepare(
        self, target: TargetType, tree: Mapping[str, Any], keep_defaults: bool = False
    ) -> dict[str, Any] | MappingError:
        values: dict[str, Any] = {}
        for descriptor in target:
            outcome = self._resolve_field(descriptor, tree, keep_defaults)
            if isinstance(outcome, MappingError):
                return outcome
            if isinstance(outcome, _Defaulted):
                if keep_defaults:
                    values[descriptor.key] = outcome.metadata.default_value()
                continue
            values[descriptor.key] = outcome
        return values

    def prepare(self, cls: type, tree: Mapping[str, Any] | None) -> dict[str, Any]:
        """Run the preparation pass only and return the constructor values.

        Nested configuration objects appear as nested dicts; defaulted fields
        carry their declared default.

        Raises:
            TargetNotInstantiableError: ``cls`` cannot be constructed.
            MissingRequiredFieldError: a required field resolved to no value.
        """
        target = describe(cls)
        prepared = self._prepare(target, tree if isinstance(tree, Mapping) else {}, keep_defaults=True)
        if isinstance(prepared, MappingError):
            raise MissingRequiredFieldError(prepared.path, target.name)
        return prepared

    # ------------------------------------------------------------------
    # Full mapping
    # ------------------------------------------------------------------

    def try_map(self, cls: type[T], tree: Mapping[str, Any] | None, subject: str | None = None) -> MappingResult[T]:
        """Map ``tree`` onto ``cls`` without raising for mapping failures.

        Args:
            cls: Dataclass or pydantic model to populate.
            tree: Raw configuration tree. ``None`` is treated as empty.
            subject: How the configuration is named in error messages,
                e.g. ``'extension "my_ext"'``.
        """
        try:
            target = describe(cls)
        except TargetNotInstantiableError as exc:
            return MappingResult.failure(exc)

        prepared = self._prepare(target, tree if isinstance(tree, Mapping) else {})
        if isinstance(prepared, MappingError):
            logger.warning("required_field_missing", target=target.name, path=prepared.path)
            return MappingResult.failure(MissingRequiredFieldError(prepared.path, target.name))

        try:
            instance = self._tree_mapper.map(cls, prepared, subject=subject)
        except (SchemaValidationException, TargetNotInstantiableError) as exc:
            logger.warning("configuration_rejected", target=target.name, error=str(exc))
            return MappingResult.failure(exc)

        logger.debug("configuration_mapped", target=target.name, fields=len(target.fields))
        return MappingResult.success(instance)

    def map(self, cls: type[T], tree: Mapping[str, Any] | None, subject: str | None = None) -> T:
        """Map ``tree`` onto ``cls``.

        Raises:
            TargetNotInstantiableError: ``cls`` cannot be constructed.
            MissingRequiredFieldError: the first required field with no value.
            SchemaValidationException: every value that does not fit its type.
        """
        return self.try_map(cls, tree, subject=subject).unwrap()
