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
"""Parser for legacy ``ext_conf_template.txt`` files.

The format is line oriented::

    # cat=basic; type=int+; label=Request timeout in seconds
    api.timeout = 30

Each ``key=value`` line becomes a :class:`FieldDefinition`; an optional
comment directly before it supplies category, type and label.
"""

from __future__ import annotations

import keyword
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import structlog

from typed_extconf.definitions import FieldDefinition
from typed_extconf.mapping.coercion import is_numeric, to_bool

logger = structlog.get_logger("typed_extconf.parser")

_COMMENT_RE = re.compile(r"cat=([^;]+);\s*type=([^;]+);\s*label=(.+)")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")
_ARRAY_SEPARATORS = (",", ";", "|", "\n")

LEGACY_TYPE_MAP: dict[str, str] = {
    "boolean": "bool",
    "bool": "bool",
    "int": "int",
    "integer": "int",
    "float": "float",
    "double": "float",
    "string": "string",
    "text": "string",
    "wrap": "string",
    "offset": "string",
    "select": "string",
    "options": "string",
    "user": "string",
}

_EMPTY_DEFAULTS: dict[str, Any] = {
    "bool": False,
    "int": 0,
    "float": 0.0,
}


def map_legacy_type(legacy_type: str) -> str:
    """Translate a template type such as ``int+`` to a field type; unknown types become ``string``."""
    base_type = re.sub(r"[+\-]", "", legacy_type).strip().lower()
    return LEGACY_TYPE_MAP.get(base_type, "string")


def convert_default_value(value: str, field_type: str) -> Any:
    """Convert a textual default to the Python value of ``field_type``."""
    if value == "":
        if field_type == "array":
            return []
        return _EMPTY_DEFAULTS.get(field_type, "")

    if field_type == "bool":
        return to_bool(value)
    if field_type == "int":
        try:
            return int(Decimal(value.strip())) if is_numeric(value) else 0
        except (InvalidOperation, ValueError, OverflowError):
            return 0
    if field_type == "float":
        return float(value) if is_numeric(value) else 0.0
    if field_type == "array":
        for separator in _ARRAY_SEPARATORS:
            if separator in value:
                return [item.strip() for item in value.split(separator)]
        return [value]
    return value


def to_field_name(key: str) -> str:
    """Turn a template key (``api.requestTimeout``) into a Python identifier (``api_request_timeout``)."""
    parts = [part for part in re.split(r"[._\-\s]", key) if part]
    name = "_".join(_CAMEL_BOUNDARY_RE.sub(r"_\1", part).lower() for part in parts)
    if not name:
        return key
    if name[0].isdigit():
        name = f"field_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    return name


class ExtConfTemplateParser:
    """Reads a legacy template into field definitions."""

    def parse(self, template_path: str | Path) -> list[FieldDefinition]:
        """Parse a template file.

        Raises:
            FileNotFoundError: the template does not exist.
        """
        path = Path(template_path)
        if not path.is_file():
            raise FileNotFoundError(f"Template file not found: {path}")
        fields = self.parse_content(path.read_text(encoding="utf-8"))
        logger.debug("template_parsed", path=str(path), fields=len(fields))
        return fields

    def parse_content(self, content: str) -> list[FieldDefinition]:
        fields: list[FieldDefinition] = []
        current_comment: dict[str, str] | None = None

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line:
                continue

            if line.startswith("#"):
                current_comment = self._parse_comment(line)
                continue

            if "=" in line:
                field = self._parse_configuration_line(line, current_comment)
                if field is not None:
                    fields.append(field)
                current_comment = None

        return fields

    @staticmethod
    def _parse_comment(line: str) -> dict[str, str] | None:
        match = _COMMENT_RE.search(line[1:].strip())
        if match is None:
            return None
        return {
            "category": match.group(1).strip(),
            "type": match.group(2).strip(),
            "label": match.group(3).strip(),
        }

    @staticmethod
    def _parse_configuration_line(line: str, comment: dict[str, str] | None) -> FieldDefinition | None:
        key, default_value = (part.strip() for part in line.split("=", 1))
        if not key:
            return None

        legacy_type = comment["type"] if comment else "string"
        field_type = map_legacy_type(legacy_type)

        return FieldDefinition(
            name=to_field_name(key),
            type=field_type,
            default=convert_default_value(default_value, field_type),
            path=key,
            required=False,
            label=comment["label"] if comment else key.replace("_", " ").replace(".", " ").capitalize(),
            category=comment["category"] if comment else "basic",
            legacy_type=legacy_type,
        )
