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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from questionary import Style
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from typed_extconf.definitions import FieldDefinition

EXTCONF_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "extconf": "bold magenta",
    "dim": "dim",
})

EXTCONF_STYLE = Style([
    ("qmark", "fg:#b388ff bold"),
    ("question", "bold"),
    ("answer", "fg:#4fc3f7 bold"),
    ("pointer", "fg:#b388ff bold"),
    ("highlighted", "fg:#b388ff bold"),
    ("selected", "fg:#66bb6a bold"),
    ("instruction", "fg:#757575"),
])

console = Console(theme=EXTCONF_THEME)


def print_title(title: str) -> None:
    from typed_extconf import __version__

    console.print(f"[extconf]{title}[/extconf]  [dim](typed-extconf v{__version__})[/dim]\n")


def print_field_table(fields: Sequence[FieldDefinition], title: str = "Fields") -> None:
    """Print parsed or entered field definitions."""
    table = Table(title=f"[extconf]{title}[/extconf]", border_style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Path", style="info")
    table.add_column("Default")
    table.add_column("Label", style="dim")

    for definition in fields:
        table.add_row(
            definition.name,
            definition.type,
            definition.path or definition.name,
            "[warning]required[/warning]" if definition.required else escape(repr(definition.default)),
            escape(definition.label),
        )

    console.print(table)


def print_instance_table(title: str, values: dict[str, Any]) -> None:
    """Print the attribute values of a mapped configuration object."""
    table = Table(title=f"[extconf]{title}[/extconf]", border_style="dim")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_column("Type", style="dim")

    for name, value in values.items():
        table.add_row(name, escape(repr(value)), type(value).__name__)

    console.print(table)


def print_next_steps() -> None:
    console.print("\n  [info]Next steps:[/info]")
    for tip in (
        "Review the generated class and adjust field types and defaults as needed",
        "Import the class from your package so it can be scanned and registered",
        "Load it with TypedExtensionConfigurationProvider.get(YourConfiguration)",
    ):
        console.print(f"    [dim]•[/dim] {tip}")
