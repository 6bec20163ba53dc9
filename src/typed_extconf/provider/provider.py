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
"""Typed access to extension configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

import structlog

from typed_extconf.attributes import extension_key_of, has_extension_config
from typed_extconf.kernel.exceptions import ConfigurationRetrievalError, MissingExtensionMetadataError
from typed_extconf.mapping.mapper import ConfigurationMapper
from typed_extconf.mapping.schema import describe
from typed_extconf.provider.sources import ConfigurationSource

T = TypeVar("T")

logger = structlog.get_logger("typed_extconf.provider")


class TypedExtensionConfigurationProvider:
    """Build typed configuration objects from an extension configuration source.

    Usage::

        provider = TypedExtensionConfigurationProvider(FileConfigurationSource.from_file("ext.yaml"))
        api = provider.get(ApiConfiguration)
        other = provider.get(ApiConfiguration, "other_ext")
    """

    def __init__(self, source: ConfigurationSource, mapper: ConfigurationMapper | None = None) -> None:
        self._source = source
        self._mapper = mapper or ConfigurationMapper()

    def get(self, config_cls: type[T], extension_key: str | None = None) -> T:
        """Map the configuration of ``extension_key`` onto ``config_cls``.

        The key defaults to the one bound with ``@extension_config``.

        Raises:
            TargetNotInstantiableError: ``config_cls`` cannot be constructed.
            MissingExtensionMetadataError: no extension key is available.
            ConfigurationRetrievalError: the source failed.
            MissingRequiredFieldError: a required key is missing.
            SchemaValidationException: values do not fit the declared types.
        """
        describe(config_cls)
        extension_key = self._resolve_extension_key(config_cls, extension_key)
        raw_config = self._get_raw_configuration(extension_key)
        instance = self._mapper.map(config_cls, raw_config, subject=f'extension "{extension_key}"')
        logger.info("configuration_loaded", target=config_cls.__qualname__, extension=extension_key)
        return instance

    def _resolve_extension_key(self, config_cls: type, extension_key: str | None) -> str:
        if extension_key is not None:
            return extension_key

        if not has_extension_config(config_cls):
            raise MissingExtensionMetadataError(
                f'Configuration class "{config_cls.__qualname__}" must be decorated with '
                "@extension_config or extension key must be provided",
                code="MISSING_EXTENSION_METADATA",
                context={"target": config_cls.__qualname__},
            )

        bound_key = extension_key_of(config_cls)
        if not bound_key:
            raise MissingExtensionMetadataError(
                "Extension key must be specified either via @extension_config or method parameter",
                code="MISSING_EXTENSION_METADATA",
                context={"target": config_cls.__qualname__},
            )
        return bound_key

    def _get_raw_configuration(self, extension_key: str) -> Mapping[str, Any]:
        try:
            config = self._source.get(extension_key)
        except Exception as exc:
            logger.warning("configuration_retrieval_failed", extension=extension_key, error=str(exc))
            raise ConfigurationRetrievalError(extension_key, exc) from exc
        return config if isinstance(config, Mapping) else {}
