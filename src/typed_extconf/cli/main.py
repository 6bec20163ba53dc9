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
"""typed-extconf CLI: configuration class generation and inspection."""

from __future__ import annotations

import dataclasses
import tomllib

import click
import yaml  # type: ignore[import-untyped]

from typed_extconf.cli.console import console
from typed_extconf.kernel.exceptions import TypedExtConfException
from typed_extconf.logging import StructlogAdapter
from typed_extconf.provider import FileConfigurationSource, TypedExtensionConfigurationProvider
from typed_extconf.settings import ToolSettings


@dataclasses.dataclass
class CliState:
    """Shared state handed to sub-commands through ``ctx.obj``."""

    settings: ToolSettings
    source: FileConfigurationSource


@click.group()
@click.version_option(package_name="typed-extconf")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default="typed-extconf.yaml",
    show_default=True,
    help="YAML or TOML file with extension configuration and tool settings.",
)
@click.option("--profile", "profiles", multiple=True, help="Profile overlay to merge (repeatable).")
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.option("--log-format", type=click.Choice(["console", "json"]), default=None, help="Log renderer.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str,
    profiles: tuple[str, ...],
    log_level: str | None,
    log_format: str | None,
) -> None:
    """typed-extconf: typed configuration objects for extension settings."""
    try:
        source = FileConfigurationSource.from_file(config_path, active_profiles=list(profiles))
    except (OSError, yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        console.print(f"[error]Cannot read {config_path}: {exc}[/error]")
        raise SystemExit(1) from exc

    try:
        settings = TypedExtensionConfigurationProvider(source).get(ToolSettings)
    except TypedExtConfException as exc:
        console.print(f"[error]Invalid tool settings in {config_path}: {exc}[/error]")
        raise SystemExit(1) from exc

    overrides = {}
    if log_level:
        overrides["level"] = log_level
    if log_format:
        overrides["format"] = log_format
    if overrides:
        settings = dataclasses.replace(settings, logging=dataclasses.replace(settings.logging, **overrides))

    StructlogAdapter().configure(settings.logging)
    ctx.obj = CliState(settings=settings, source=source)


from typed_extconf.cli.generate import generate_command  # noqa: E402
from typed_extconf.cli.show import show_command  # noqa: E402

cli.add_command(generate_command, name="generate")
cli.add_command(show_command, name="show")
