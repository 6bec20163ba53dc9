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
"""Unified exception hierarchy for typed-extconf.

All library exceptions inherit from TypedExtConfException, so callers can
catch one type to handle every failure, or a specific subclass to tell the
failure categories apart:

- ConfigurationException: the configuration class or its environment is
  wrong (not instantiable, missing extension binding, retrieval failure)
  or a required key is missing from the data.
- SchemaValidationException: the configuration data does not fit the
  declared field types. Carries every offending path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typed_extconf.mapping.errors import MappingError


# =============================================================================
# Base Exception
# =============================================================================


class TypedExtConfException(Exception):
    """Base exception for all typed-extconf errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "MISSING_REQUIRED_FIELD").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(TypedExtConfException):
    """A configuration object could not be produced."""


class TargetNotInstantiableError(ConfigurationException):
    """The configuration class cannot be constructed (abstract, protocol, no field list)."""

    def __init__(self, target: object, reason: str = "") -> None:
        name = getattr(target, "__qualname__", repr(target))
        message = f'Configuration class "{name}" must be instantiable'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code="TARGET_NOT_INSTANTIABLE", context={"target": name})


class MissingExtensionMetadataError(ConfigurationException):
    """No extension key is bound to the configuration class and none was supplied."""


class ConfigurationRetrievalError(ConfigurationException):
    """The raw configuration could not be fetched from its source."""

    def __init__(self, extension_key: str, cause: BaseException) -> None:
        super().__init__(
            f'Failed to retrieve configuration for extension "{extension_key}": {cause}',
            code="CONFIGURATION_RETRIEVAL",
            context={"extension_key": extension_key},
        )
        self.extension_key = extension_key


class MissingRequiredFieldError(ConfigurationException):
    """A field marked ``required=True`` resolved to no value."""

    def __init__(self, path: str, target: str = "") -> None:
        super().__init__(
            f'Required configuration key "{path}" is missing',
            code="MISSING_REQUIRED_FIELD",
            context={"path": path, "target": target},
        )
        self.path = path


# =============================================================================
# Data Exceptions
# =============================================================================


class SchemaValidationException(TypedExtConfException):
    """One or more values violate the declared field types.

    Unlike MissingRequiredFieldError this is not fail-fast: ``errors`` holds
    every violation found by the structural pass.
    """

    def __init__(self, subject: str, errors: list[MappingError]) -> None:
        detail = "; ".join(error.describe() for error in errors)
        super().__init__(
            f"Failed to map configuration for {subject}: {detail}",
            code="SCHEMA_VALIDATION",
            context={"errors": [error.describe() for error in errors]},
        )
        self.errors = list(errors)

    def messages(self) -> list[str]:
        """Return one ``path: reason`` line per violation."""
        return [error.describe() for error in self.errors]

    def paths(self) -> list[str]:
        return [error.path for error in self.errors]
