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
"""Raw configuration sources keyed by extension.

A source returns the untyped tree stored for one extension key, or ``None``
when it holds nothing for that key.
"""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml  # type: ignore[import-untyped]

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")


@runtime_checkable
class ConfigurationSource(Protocol):
    """Port for fetching the raw configuration tree of one extension."""

    def get(self, extension_key: str) -> Mapping[str, Any] | None: ...


class DictConfigurationSource:
    """In-memory source: ``{extension_key: raw_tree}``."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def get(self, extension_key: str) -> Mapping[str, Any] | None:
        return self._data.get(extension_key)

    def put(self, extension_key: str, tree: Mapping[str, Any]) -> None:
        self._data[extension_key] = tree


class FileConfigurationSource:
    """Extension trees loaded from YAML or TOML files.

    Top-level keys are extension keys. Several files are deep-merged in
    order (later wins). String values may contain ``${ENV_VAR}`` or
    ``${ENV_VAR:default}`` placeholders, resolved at read time.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """List of config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
    ) -> FileConfigurationSource:
        """Load ``path`` plus its profile overlays ``<stem>-<profile><suffix>``.

        Missing files are skipped; the result then holds no data.
        """
        path = Path(path)
        data: dict[str, Any] = {}
        sources: list[str] = []

        if path.exists():
            data = cls._deep_merge(data, cls._load_config_data(path))
            sources.append(str(path))

            for profile in active_profiles or []:
                profile_path = path.parent / f"{path.stem}-{profile}{path.suffix}"
                if profile_path.exists():
                    data = cls._deep_merge(data, cls._load_config_data(profile_path))
                    sources.append(f"{profile_path} (profile: {profile})")

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @classmethod
    def from_files(cls, *paths: str | Path) -> FileConfigurationSource:
        """Merge several files in the given order, skipping missing ones."""
        data: dict[str, Any] = {}
        sources: list[str] = []
        for candidate in map(Path, paths):
            if candidate.is_file():
                data = cls._deep_merge(data, cls._load_config_data(candidate))
                sources.append(str(candidate))

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = FileConfigurationSource._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, extension_key: str) -> Mapping[str, Any] | None:
        tree = self._data.get(extension_key)
        if not isinstance(tree, dict):
            return tree
        return self._resolve_tree(tree)

    def _resolve_tree(self, node: Any) -> Any:
        if isinstance(node, dict):
            return {key: self._resolve_tree(value) for key, value in node.items()}
        if isinstance(node, list):
            return [self._resolve_tree(item) for item in node]
        if isinstance(node, str) and "${" in node:
            return self._resolve_placeholders(node)
        return node

    @staticmethod
    def _resolve_placeholders(value: str) -> str:
        """Resolve ``${ENV_VAR}`` and ``${ENV_VAR:default}`` placeholders."""

        def _replace(match: re.Match[str]) -> str:
            inner = match.group(1)
            if ":" in inner:
                env_key, default_val = inner.split(":", 1)
            else:
                env_key, default_val = inner, None

            env_val = os.environ.get(env_key)
            if env_val is not None:
                return env_val
            if default_val is not None:
                return default_val

            raise ValueError(f"Cannot resolve placeholder '${{{inner}}}': not found in environment")

        return _PLACEHOLDER_RE.sub(_replace, value)
