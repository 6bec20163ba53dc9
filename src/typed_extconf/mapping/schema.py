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
"""Static field descriptors for configuration classes.

A configuration class is introspected once: its fields, their lookup paths,
required flags, defaults and semantic kinds are frozen into a
:class:`TargetType` that is cached process-wide and shared read-only.
"""

from __future__ import annotations

import dataclasses
import inspect
import threading
import types
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from typed_extconf.attributes import ExtConfProperty
from typed_extconf.kernel.exceptions import TargetNotInstantiableError
from typed_extconf.mapping.coercion import ScalarKind

_SCALAR_KINDS: dict[type, ScalarKind] = {
    str: ScalarKind.STRING,
    int: ScalarKind.INT,
    float: ScalarKind.FLOAT,
    bool: ScalarKind.BOOL,
}

_ARRAY_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)


class _NoDefault:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT = _NoDefault()


@dataclass(frozen=True)
class FieldMetadata:
    """Effective mapping metadata of one field.

    ``has_default`` reflects the language-level default of the field and is
    independent of ``required``. Factories run only when
    :meth:`default_value` is called.
    """

    lookup_path: str
    required: bool
    default: Any = NO_DEFAULT
    default_factory: Callable[[], Any] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT or self.default_factory is not None

    def default_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


@dataclass(frozen=True)
class FieldDescriptor:
    """One constructor slot of a configuration class.

    Attributes:
        name: Attribute name on the produced instance.
        key: Key under which the value is handed to the constructor
            (differs from ``name`` only for aliased pydantic fields).
        annotation: Declared type with ``Annotated`` metadata stripped.
        kind: Semantic kind derived from ``annotation``.
        prop: The field's ``ExtConfProperty`` if it declares one.
        nested: The nested configuration class when ``kind`` is NESTED.
    """

    name: str
    key: str
    annotation: Any
    kind: ScalarKind
    prop: ExtConfProperty | None = None
    default: Any = NO_DEFAULT
    default_factory: Callable[[], Any] | None = None
    nested: type | None = None


@dataclass(frozen=True)
class TargetType:
    """Ordered field table of one configuration class."""

    cls: type
    fields: tuple[FieldDescriptor, ...]

    @property
    def name(self) -> str:
        return self.cls.__qualname__

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def get(self, key: str) -> FieldDescriptor | None:
        for descriptor in self.fields:
            if descriptor.key == key or descriptor.name == key:
                return descriptor
        return None

    def lookup_path_for(self, location: tuple[str | int, ...]) -> str:
        """Translate a constructor location, e.g. ``("api", "timeout")``, to its lookup path."""
        if not location:
            return ""
        descriptor = self.get(str(location[0]))
        if descriptor is None:
            return ".".join(str(part) for part in location)
        rest = location[1:]
        if rest and descriptor.nested is not None:
            return describe(descriptor.nested).lookup_path_for(rest)
        path = resolve_metadata(descriptor).lookup_path
        if rest:
            path = ".".join([path, *(str(part) for part in rest)])
        return path


def resolve_metadata(descriptor: FieldDescriptor) -> FieldMetadata:
    """Combine field-level metadata with the field name."""
    prop = descriptor.prop
    lookup_path = prop.path if prop is not None and prop.path else descriptor.name
    required = prop.required if prop is not None else False
    return FieldMetadata(lookup_path, required, descriptor.default, descriptor.default_factory)


# ---------------------------------------------------------------------------
# Introspection helpers
# ---------------------------------------------------------------------------


def _split_annotated(hint: Any) -> tuple[Any, ExtConfProperty | None]:
    if get_origin(hint) is Annotated:
        base, *extras = get_args(hint)
        prop = next((extra for extra in extras if isinstance(extra, ExtConfProperty)), None)
        return base, prop
    return hint, None


def _is_model_class(tp: Any) -> bool:
    return inspect.isclass(tp) and issubclass(tp, BaseModel)


def _has_field_list(tp: Any) -> bool:
    return inspect.isclass(tp) and (dataclasses.is_dataclass(tp) or _is_model_class(tp))


def _is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def _raw_fields(cls: type) -> list[tuple[str, str, Any, ExtConfProperty | None, Any, Callable[[], Any] | None]]:
    """Return ``(name, key, annotation, prop, default, default_factory)`` per constructor field."""
    rows = []
    if _is_model_class(cls):
        for name, info in cls.model_fields.items():
            prop = next((m for m in info.metadata if isinstance(m, ExtConfProperty)), None)
            default: Any = NO_DEFAULT
            factory = None
            if not info.is_required():
                if info.default_factory is not None:
                    factory = info.default_factory
                else:
                    default = info.default
            rows.append((name, info.alias or name, info.annotation, prop, default, factory))
        return rows

    hints = get_type_hints(cls, include_extras=True)
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        annotation, prop = _split_annotated(hints.get(f.name, Any))
        default = f.default if f.default is not dataclasses.MISSING else NO_DEFAULT
        factory = f.default_factory if f.default_factory is not dataclasses.MISSING else None
        rows.append((f.name, f.name, annotation, prop, default, factory))
    return rows


def is_nested_mappable(declared_type: Any) -> bool:
    """Decide whether a field type is itself a mappable configuration class.

    True iff the type is a non-builtin, concrete dataclass or pydantic model
    and at least one of its own fields carries an ``ExtConfProperty``.
    Structures without any annotated field are opaque values.
    """
    if not inspect.isclass(declared_type) or declared_type.__module__ == "builtins":
        return False
    if not _has_field_list(declared_type) or inspect.isabstract(declared_type):
        return False
    try:
        rows = _raw_fields(declared_type)
    except (NameError, TypeError):
        return False
    return any(prop is not None for _name, _key, _ann, prop, _default, _factory in rows)


def classify(annotation: Any) -> tuple[ScalarKind, type | None]:
    """Return the semantic kind of ``annotation`` and, for NESTED, the nested class."""
    annotation, _prop = _split_annotated(annotation)
    origin = get_origin(annotation)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return classify(members[0])
        return ScalarKind.OPAQUE, None

    if annotation in _SCALAR_KINDS:
        return _SCALAR_KINDS[annotation], None
    if annotation in _ARRAY_TYPES or origin in _ARRAY_TYPES:
        return ScalarKind.ARRAY, None
    if is_nested_mappable(annotation):
        return ScalarKind.NESTED, annotation
    return ScalarKind.OPAQUE, None


def _introspect(cls: type) -> TargetType:
    if _is_protocol(cls) or inspect.isabstract(cls):
        raise TargetNotInstantiableError(cls, "abstract classes and protocols cannot be constructed")
    if not _has_field_list(cls):
        raise TargetNotInstantiableError(cls, "expected a dataclass or a pydantic model")

    try:
        rows = _raw_fields(cls)
    except NameError as exc:
        raise TargetNotInstantiableError(cls, f"unresolvable field annotation ({exc})") from exc

    fields = []
    for name, key, annotation, prop, default, factory in rows:
        kind, nested = classify(annotation)
        fields.append(
            FieldDescriptor(
                name=name,
                key=key,
                annotation=annotation,
                kind=kind,
                prop=prop,
                default=default,
                default_factory=factory,
                nested=nested,
            )
        )
    return TargetType(cls=cls, fields=tuple(fields))


_cache: dict[type, TargetType] = {}
_cache_lock = threading.Lock()


def describe(cls: type) -> TargetType:
    """Return the cached :class:`TargetType` of ``cls``, introspecting it on first use.

    Raises:
        TargetNotInstantiableError: ``cls`` is not a concrete dataclass or pydantic model.
    """
    if not inspect.isclass(cls):
        raise TargetNotInstantiableError(cls, "not a class")
    cached = _cache.get(cls)
    if cached is not None:
        return cached
    with _cache_lock:
        cached = _cache.get(cls)
        if cached is None:
            cached = _introspect(cls)
            _cache[cls] = cached
    return cached


def clear_cache() -> None:
    with _cache_lock:
        _cache.clear()
