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
"""Auto-discovery of ``@extension_config`` classes and lazy typed accessors."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
import threading
import types
from typing import Any, TypeVar

import structlog

from typed_extconf.attributes import extension_key_of, has_extension_config
from typed_extconf.provider.provider import TypedExtensionConfigurationProvider

T = TypeVar("T")

logger = structlog.get_logger("typed_extconf.scanner")


class ConfigurationRegistry:
    """Singleton accessors for registered configuration classes.

    Instances are mapped on first ``get`` and reused afterwards.
    """

    def __init__(self, provider: TypedExtensionConfigurationProvider) -> None:
        self._provider = provider
        self._registered: dict[type, str | None] = {}
        self._instances: dict[type, Any] = {}
        self._lock = threading.Lock()

    @property
    def registered(self) -> list[type]:
        return list(self._registered)

    def register(self, config_cls: type, extension_key: str | None = None) -> None:
        self._registered[config_cls] = extension_key or extension_key_of(config_cls)

    def __contains__(self, config_cls: object) -> bool:
        return config_cls in self._registered

    def get(self, config_cls: type[T]) -> T:
        """Return the mapped instance of a registered class.

        Raises:
            KeyError: ``config_cls`` was never registered.
        """
        if config_cls not in self._registered:
            raise KeyError(f"{config_cls.__qualname__} is not a registered configuration class")
        with self._lock:
            if config_cls not in self._instances:
                self._instances[config_cls] = self._provider.get(config_cls, self._registered[config_cls])
            return self._instances[config_cls]

    def reset(self) -> None:
        """Drop every mapped instance so the next ``get`` re-reads the source."""
        with self._lock:
            self._instances.clear()


def scan_module_classes(module: types.ModuleType) -> list[type]:
    """Extract all ``@extension_config`` classes defined in a module."""
    classes: list[type] = []
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if has_extension_config(obj) and obj.__module__ == module.__name__:
            classes.append(obj)
    return classes


def scan_package(package_name: str, registry: ConfigurationRegistry) -> int:
    """Scan a package for configuration classes and register them.

    Args:
        package_name: Dotted package name to scan (e.g. "myapp.configuration").
        registry: Registry to add discovered classes to.

    Returns:
        Number of classes registered.
    """
    count = 0
    module = importlib.import_module(package_name)
    count += _register_from_module(module, registry)

    if hasattr(module, "__path__"):
        for _importer, modname, _ispkg in pkgutil.walk_packages(module.__path__, prefix=module.__name__ + "."):
            try:
                submodule = importlib.import_module(modname)
            except ImportError as exc:
                logger.warning("module_import_failed", module=modname, error=str(exc))
                continue
            count += _register_from_module(submodule, registry)

    logger.debug("package_scanned", package=package_name, registered=count)
    return count


def _register_from_module(module: types.ModuleType, registry: ConfigurationRegistry) -> int:
    classes = scan_module_classes(module)
    for cls in classes:
        registry.register(cls)
    return len(classes)
