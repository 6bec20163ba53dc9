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
"""Jinja2-based source generator for typed configuration classes."""

from __future__ import annotations

import keyword
import math
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader

from typed_extconf.definitions import FIELD_TYPES, FieldDefinition
from typed_extconf.mapping.coercion import to_bool
from typed_extconf.parser.template_parser import convert_default_value

_TYPE_HINTS: dict[str, str] = {
    "string": "str",
    "int": "int",
    "float": "float",
    "bool": "bool",
    "array": "list[str]",
}


def default_class_name(extension_key: str) -> str:
    """``my_ext`` -> ``MyExtConfiguration``."""
    parts = re.split(r"[_\-.]", extension_key)
    return "".join(part[:1].upper() + part[1:] for part in parts if part) + "Configuration"


def to_module_name(class_name: str) -> str:
    """``MyExtConfiguration`` -> ``my_ext_configuration``."""
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", class_name).lower()


def _get_env() -> Environment:
    """Create the Jinja2 template environment."""
    return Environment(
        loader=PackageLoader("typed_extconf.generator", "templates"),
        keep_trailing_newline=True,
        lstrip_blocks=True,
        trim_blocks=True,
    )


class ConfigurationClassGenerator:
    """Render the source of a frozen ``@extension_config`` dataclass."""

    def __init__(self) -> None:
        self._env = _get_env()

    def generate(self, extension_key: str, class_name: str, fields: Sequence[FieldDefinition]) -> str:
        """Return module source for ``class_name`` bound to ``extension_key``.

        Required fields come first and have no default.

        Raises:
            ValueError: no fields, an invalid identifier, a duplicate name or
                an unknown field type.
        """
        if not fields:
            raise ValueError("At least one property must be defined")
        if not extension_key:
            raise ValueError("Extension key must not be empty")
        self._check_identifier(class_name, "class name")

        seen: set[str] = set()
        for definition in fields:
            self._check_identifier(definition.name, "field name")
            if definition.name in seen:
                raise ValueError(f"Duplicate field name '{definition.name}'")
            if definition.type not in FIELD_TYPES:
                raise ValueError(f"Unknown type '{definition.type}' for field '{definition.name}'")
            seen.add(definition.name)

        ordered = [d for d in fields if d.required] + [d for d in fields if not d.required]
        rendered = [self._render_field(d) for d in ordered]
        uses_field = any("field(" in r["declaration"] for r in rendered)

        context = {
            "extension_key": extension_key,
            "extension_key_repr": repr(extension_key),
            "class_name": class_name,
            "dataclass_imports": "dataclass, field" if uses_field else "dataclass",
            "fields": rendered,
        }
        return self._env.get_template("configuration.py.j2").render(context)

    def write(self, source: str, output_path: str | Path) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    @staticmethod
    def _check_identifier(name: str, what: str) -> None:
        if not name.isidentifier() or keyword.iskeyword(name):
            raise ValueError(f"Invalid {what} '{name}'")

    def _render_field(self, definition: FieldDefinition) -> dict[str, str]:
        args = []
        if definition.path and definition.path != definition.name:
            args.append(f"path={definition.path!r}")
        if definition.required:
            args.append("required=True")

        declaration = (
            f"{definition.name}: Annotated[{_TYPE_HINTS[definition.type]}, ExtConfProperty({', '.join(args)})]"
        )
        if not definition.required:
            declaration += f" = {self._format_default(definition.default, definition.type)}"

        return {"declaration": declaration, "label": definition.label}

    @staticmethod
    def _format_default(value: Any, field_type: str) -> str:
        if value is None:
            value = convert_default_value("", field_type)
        elif isinstance(value, str) and field_type != "string":
            value = convert_default_value(value, field_type)

        if field_type == "array":
            items = [str(item) for item in value] if isinstance(value, (list, tuple)) else []
            if not items:
                return "field(default_factory=list)"
            return f"field(default_factory=lambda: {items!r})"
        if field_type == "bool":
            return repr(to_bool(value))
        if field_type == "int":
            return repr(int(value))
        if field_type == "float":
            number = float(value)
            if not math.isfinite(number):
                raise ValueError(f"Default value {value!r} is not a finite number")
            return repr(number)
        return repr(str(value))
