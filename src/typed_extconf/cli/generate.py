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
"""'typed-extconf generate' command for scaffolding configuration classes."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
import questionary

from typed_extconf.cli.console import (
    EXTCONF_STYLE,
    console,
    print_field_table,
    print_next_steps,
    print_title,
)
from typed_extconf.definitions import FIELD_TYPES, FieldDefinition
from typed_extconf.generator import ConfigurationClassGenerator, default_class_name, to_module_name
from typed_extconf.parser import ExtConfTemplateParser, convert_default_value

if TYPE_CHECKING:
    from typed_extconf.cli.main import CliState

DEFAULT_TEMPLATE = "ext_conf_template.txt"


def _ask_extension_key() -> str:
    return questionary.text(
        "Extension key:",
        validate=lambda val: True if val.strip() else "Extension key cannot be empty.",
        style=EXTCONF_STYLE,
    ).unsafe_ask().strip()


def _ask_mode() -> str:
    return questionary.select(
        "Select generation mode:",
        choices=[
            questionary.Choice(title="From ext_conf_template.txt", value="template"),
            questionary.Choice(title="Manual configuration", value="manual"),
        ],
        default="template",
        style=EXTCONF_STYLE,
    ).unsafe_ask()


def _ask_class_name(extension_key: str) -> str:
    default = default_class_name(extension_key)
    answer = questionary.text("Class name:", default=default, style=EXTCONF_STYLE).unsafe_ask()
    return answer.strip() or default


def _ask_manual_fields() -> list[FieldDefinition]:
    """Prompt for fields until an empty name is entered."""
    console.print("  [dim]Enter configuration fields (empty name to finish).[/dim]\n")
    fields: list[FieldDefinition] = []

    while True:
        name = questionary.text("Field name:", style=EXTCONF_STYLE).unsafe_ask().strip()
        if not name:
            break

        field_type = questionary.select(
            "Field type:",
            choices=list(FIELD_TYPES),
            default="string",
            style=EXTCONF_STYLE,
        ).unsafe_ask()
        default = questionary.text("Default value (optional):", style=EXTCONF_STYLE).unsafe_ask()
        path = questionary.text(f"Configuration path (default: {name}):", default=name, style=EXTCONF_STYLE).unsafe_ask()
        required = questionary.confirm("Is required?", default=False, style=EXTCONF_STYLE).unsafe_ask()

        fields.append(
            FieldDefinition(
                name=name,
                type=field_type,
                default=convert_default_value(default, field_type) if default else None,
                path=path.strip() or name,
                required=bool(required),
                label=name.replace("_", " ").capitalize(),
            )
        )
        console.print(f"  [success]Added field:[/success] {name} ({field_type})")

    return fields


def _load_template_fields(template_path: Path) -> list[FieldDefinition] | None:
    """Return parsed fields, or ``None`` when the user switches to manual mode."""
    if not template_path.is_file():
        console.print(f"[error]No template found at {template_path}[/error]")
        if questionary.confirm(
            "Would you like to generate configuration manually instead?",
            default=False,
            style=EXTCONF_STYLE,
        ).unsafe_ask():
            return None
        raise SystemExit(1)

    try:
        return ExtConfTemplateParser().parse(template_path)
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[error]Failed to parse {template_path}: {exc}[/error]")
        raise SystemExit(1) from exc


@click.command()
@click.option("--extension", "-e", "extension_key", default=None, help="Extension key the class is bound to.")
@click.option(
    "--template",
    "-t",
    "template_path",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Legacy template to read (default: {DEFAULT_TEMPLATE}).",
)
@click.option("--manual", is_flag=True, help="Define the fields interactively instead of reading a template.")
@click.option("--class-name", "-c", default=None, help="Class name (default: <ExtensionKey>Configuration).")
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False), default=None, help="Output file.")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing output file without asking.")
@click.pass_obj
def generate_command(
    state: CliState | None,
    extension_key: str | None,
    template_path: str | None,
    manual: bool,
    class_name: str | None,
    output_path: str | None,
    force: bool,
) -> None:
    """Generate a typed configuration class."""
    print_title("Typed Extension Configuration Generator")

    try:
        extension_key = extension_key or _ask_extension_key()
        if manual:
            mode = "manual"
        elif template_path:
            mode = "template"
        else:
            mode = _ask_mode()

        fields: list[FieldDefinition] | None = None
        if mode == "template":
            fields = _load_template_fields(Path(template_path or DEFAULT_TEMPLATE))
            if fields is not None and not fields:
                console.print("[warning]No configuration fields found in the template.[/warning]")
                return
        if fields is None:
            fields = _ask_manual_fields()
            if not fields:
                console.print("[warning]No fields defined. Exiting.[/warning]")
                return

        print_field_table(fields)
        class_name = class_name or _ask_class_name(extension_key)
    except (KeyboardInterrupt, EOFError):
        console.print("\n[warning]Cancelled.[/warning]")
        raise SystemExit(0) from None

    generator = ConfigurationClassGenerator()
    try:
        source = generator.generate(extension_key, class_name, fields)
    except ValueError as exc:
        console.print(f"[error]Failed to generate class: {exc}[/error]")
        raise SystemExit(1) from exc

    output_dir = state.settings.output_dir if state is not None else "."
    target = Path(output_path) if output_path else Path(output_dir) / f"{to_module_name(class_name)}.py"

    if target.exists() and not force:
        if not questionary.confirm(
            f"File {target} already exists. Overwrite?",
            default=False,
            style=EXTCONF_STYLE,
        ).unsafe_ask():
            console.print("Operation cancelled.")
            return

    try:
        generator.write(source, target)
    except OSError as exc:
        console.print(f"[error]Failed to write {target}: {exc}[/error]")
        raise SystemExit(1) from exc

    console.print(f"\n[success]Configuration class generated at {target}[/success]")
    print_next_steps()
