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
"""Declarative metadata for typed configuration classes.

Usage::

    @extension_config("my_ext")
    @dataclass(frozen=True)
    class MyConfiguration:
        token: Annotated[str, ExtConfProperty(path="api.token", required=True)]
        endpoint: Annotated[str, ExtConfProperty(path="api.endpoint")] = "/api"
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

_EXTENSION_KEY_ATTR = "__typed_extconf_extension_key__"


@dataclass(frozen=True)
class ExtConfProperty:
    """Per-field mapping metadata, attached through ``typing.Annotated``.

    Attributes:
        path: Dot-delimited lookup path in the raw tree. Falls back to the
            field name when ``None`` or empty.
        required: Raise when no value resolves, even if the field has a default.
    """

    path: str | None = None
    required: bool = False


def extension_config(extension_key: str | None) -> Callable[[type[T]], type[T]]:
    """Bind a configuration class to the extension whose raw tree feeds it.

    The key may be ``None`` for classes that always get their key from the
    caller; the provider then rejects calls that omit it.
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _EXTENSION_KEY_ATTR, extension_key)
        return cls

    return decorator


def has_extension_config(cls: type) -> bool:
    """True if ``cls`` itself (not a base class) carries ``@extension_config``."""
    return _EXTENSION_KEY_ATTR in vars(cls)


def extension_key_of(cls: type) -> str | None:
    return vars(cls).get(_EXTENSION_KEY_ATTR)
