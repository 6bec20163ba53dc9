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
"""'typed-extconf show' command: map a configuration class and print it."""

from __future__ import annotations

import dataclasses
import importlib
from typing import TYPE_CHECKING, Any

import click
from pydantic import BaseModel

from typed_extconf.cli.console import console, print_instance_table
from typed_extconf.kernel.exceptions import SchemaValidationException, TypedExtConfException
from typed_extconf.provider import TypedExtensionConfigurationProvider

if TYPE_CHECKING:
    from typed_extconf.cli.main import CliState


def _import_class(reference: str) -> type:
    """Resolve ``package.module:ClassName``."""
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"Expected 'module:ClassName', got '{reference}'", param_hint="--class")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"Cannot import module '{module_name}': {exc}", param_hint="--class") from exc

    target: Any = module
    for part in attr.split("."):
        target = getattr(target, part, None)
        if target is None:
            raise click.BadParameter(f"'{attr}' not found in module '{module_name}'", param_hint="--class")
    if not isinstance(target, type):
        raise click.BadParameter(f"'{reference}' is not a class", param_hint="--class")
    return target


def _as_dict(instance: Any) -> dict[str, Any]:
    if isinstance(instance, BaseModel):
        return instance.model_dump()
    if dataclasses.is_dataclass(instance):
        return dataclasses.asdict(instance)
    return dict(vars(instance))


@click.command()
@click.option("--class", "class_ref", required=True, help="Configuration class as 'module:ClassName'.")
@click.option("--extension", "-e", "extension_key", default=None, help="Override the bound extension key.")
@click.pass_obj
def show_command(state: CliState, class_ref: str, extension_key: str | None) -> None:
    """Map the loaded configuration onto a class and print the result."""
    config_cls = _import_class(class_ref)
    provider = TypedExtensionConfigurationProvider(state.source)

    try:
        instance = provider.get(config_cls, extension_key)
    except SchemaValidationException as exc:
        console.print(f"[error]{exc.message}[/error]")
        for message in exc.messages():
            console.print(f"  [dim]•[/dim] {message}")
        raise SystemExit(1) from exc
    except TypedExtConfException as exc:
        console.print(f"[error]{exc.message}[/error]")
        raise SystemExit(1) from exc

    print_instance_table(config_cls.__qualname__, _as_dict(instance))
