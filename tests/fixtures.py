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
"""Configuration classes shared by the test suite."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Annotated

from pydantic import BaseModel, Field

from typed_extconf import ExtConfProperty, extension_config


@extension_config("test_ext")
@dataclass(frozen=True)
class SimpleTestConfiguration:
    string_value: Annotated[str, ExtConfProperty(path="basic.string")] = "default"
    int_value: Annotated[int, ExtConfProperty(path="basic.integer")] = 42
    bool_value: Annotated[bool, ExtConfProperty(path="basic.boolean")] = False
    float_value: Annotated[float, ExtConfProperty(path="basic.float")] = 3.14


@dataclass(frozen=True)
class NestedTestConfiguration:
    enabled: Annotated[bool, ExtConfProperty(path="nested.enabled")] = False
    priority: Annotated[int, ExtConfProperty(path="nested.priority")] = 10
    name: Annotated[str, ExtConfProperty(path="nested.name")] = ""


@extension_config("complex_ext")
@dataclass(frozen=True)
class ComplexTestConfiguration:
    nested_config: NestedTestConfiguration
    endpoint: Annotated[str, ExtConfProperty(path="main.endpoint")] = "/api"
    simpleValue: Annotated[str, ExtConfProperty()] = "fallback"  # noqa: N815


@dataclass(frozen=True)
class ApiConfiguration:
    url: Annotated[str, ExtConfProperty(path="api.url")] = "https://api.example.com"
    timeout: Annotated[int, ExtConfProperty(path="api.timeout")] = 30
    retries: Annotated[int, ExtConfProperty(path="api.retries")] = 3


@dataclass(frozen=True)
class SecurityConfiguration:
    token: Annotated[str, ExtConfProperty(path="security.token")] = ""
    enabled: Annotated[bool, ExtConfProperty(path="security.enabled")] = True


@extension_config("multi_nested_ext")
@dataclass(frozen=True)
class MultiNestedTestConfiguration:
    api_configuration: ApiConfiguration
    security_configuration: SecurityConfiguration
    nested_test_configuration: NestedTestConfiguration
    endpoint: Annotated[str, ExtConfProperty(path="api.endpoint")] = ""


@extension_config("test_ext")
@dataclass(frozen=True)
class RequiredTestConfiguration:
    required_value: Annotated[str, ExtConfProperty(path="required.value", required=True)]
    optional_value: Annotated[str, ExtConfProperty(path="optional.value")] = "optional"


@extension_config("error_test")
@dataclass(frozen=True)
class ErrorTestConfiguration:
    invalid_type: Annotated[int, ExtConfProperty(path="invalidType")] = 0
    ratio: Annotated[float, ExtConfProperty(path="limits.ratio")] = 1.0


@extension_config(None)
@dataclass(frozen=True)
class InvalidExtensionConfigTestConfiguration:
    value: Annotated[str, ExtConfProperty()] = "test"


@dataclass(frozen=True)
class UndecoratedConfiguration:
    value: str = "test"


@extension_config("required_default_ext")
@dataclass(frozen=True)
class RequiredWithDefaultConfiguration:
    token: Annotated[str, ExtConfProperty(path="auth.token", required=True)] = "unused"


@extension_config("nested_required_ext")
@dataclass(frozen=True)
class NestedRequiredConfiguration:
    credentials: CredentialsConfiguration
    name: Annotated[str, ExtConfProperty(path="app.name", required=True)]


@dataclass(frozen=True)
class CredentialsConfiguration:
    user: Annotated[str, ExtConfProperty(path="auth.user", required=True)]
    password: Annotated[str, ExtConfProperty(path="auth.password")] = ""


@dataclass(frozen=True)
class PlainPoint:
    """A structure without any mapping metadata; treated as an opaque value."""

    x: int = 0
    y: int = 0


@extension_config("collections_ext")
@dataclass(frozen=True)
class CollectionConfiguration:
    hosts: Annotated[list[str], ExtConfProperty(path="cluster.hosts")] = field(default_factory=list)
    labels: Annotated[dict[str, str], ExtConfProperty(path="cluster.labels")] = field(default_factory=dict)
    origin: Annotated[PlainPoint | None, ExtConfProperty(path="cluster.origin")] = None
    port: Annotated[int | None, ExtConfProperty(path="cluster.port")] = None


@extension_config("pydantic_ext")
class PydanticConfiguration(BaseModel):
    host: Annotated[str, ExtConfProperty(path="server.host")] = "localhost"
    port: Annotated[int, ExtConfProperty(path="server.port")] = 8080
    debug: Annotated[bool, ExtConfProperty(path="server.debug")] = False
    tags: Annotated[list[str], ExtConfProperty(path="server.tags")] = Field(default_factory=list)


class AbstractConfiguration(abc.ABC):
    @abc.abstractmethod
    def endpoint(self) -> str: ...


DECLARED_TAGS = ("alpha", "beta")


@extension_config("declared_defaults_ext")
@dataclass(frozen=True)
class DeclaredDefaultsConfiguration:
    ratio: Annotated[float, ExtConfProperty(path="limits.ratio")] = 3
    tags: Annotated[tuple[str, ...], ExtConfProperty(path="limits.tags")] = DECLARED_TAGS


@dataclass(frozen=True)
class DeclaredLimitsConfiguration:
    tags: Annotated[tuple[str, ...], ExtConfProperty(path="limits.tags")] = DECLARED_TAGS


@extension_config("declared_limits_ext")
@dataclass(frozen=True)
class OuterDeclaredConfiguration:
    limits: DeclaredLimitsConfiguration
