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
"""Field definitions exchanged between the template parser, the CLI and the generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

FIELD_TYPES: tuple[str, ...] = ("string", "int", "float", "bool", "array")


@dataclass(frozen=True)
class FieldDefinition:
    """One field of a configuration class to generate.

    ``default`` of ``None`` means "no explicit default"; the generator then
    uses the empty value of ``type``.
    """

    name: str
    type: str = "string"
    default: Any = None
    path: str | None = None
    required: bool = False
    label: str = ""
    category: str = "basic"
    legacy_type: str = ""
