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
"""Settings of the typed-extconf tooling, read from the ``typed_extconf`` section.

Example ``typed-extconf.yaml``::

    typed_extconf:
      logging:
        level: DEBUG
        format: json
        levels:
          typed_extconf.mapping: WARNING
      generator:
        output_dir: src/myapp/configuration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

from typed_extconf.attributes import ExtConfProperty, extension_config

SETTINGS_EXTENSION_KEY = "typed_extconf"


@dataclass(frozen=True)
class LoggingSettings:
    level: Annotated[str, ExtConfProperty(path="logging.level")] = "INFO"
    format: Annotated[str, ExtConfProperty(path="logging.format")] = "console"
    levels: Annotated[dict[str, str], ExtConfProperty(path="logging.levels")] = field(default_factory=dict)


@extension_config(SETTINGS_EXTENSION_KEY)
@dataclass(frozen=True)
class ToolSettings:
    logging: LoggingSettings
    output_dir: Annotated[str, ExtConfProperty(path="generator.output_dir")] = "."
