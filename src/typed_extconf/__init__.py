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
"""typed-extconf: map raw extension configuration trees onto typed objects."""

from typed_extconf.attributes import ExtConfProperty, extension_config, extension_key_of, has_extension_config
from typed_extconf.kernel.exceptions import (
    ConfigurationException,
    ConfigurationRetrievalError,
    MissingExtensionMetadataError,
    MissingRequiredFieldError,
    SchemaValidationException,
    TargetNotInstantiableError,
    TypedExtConfException,
)
from typed_extconf.mapping import ConfigurationMapper, MappingError, MappingResult, TreeMapper, TreeMapperFactory
from typed_extconf.provider import (
    ConfigurationRegistry,
    ConfigurationSource,
    DictConfigurationSource,
    FileConfigurationSource,
    TypedExtensionConfigurationProvider,
    scan_package,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationException",
    "ConfigurationMapper",
    "ConfigurationRegistry",
    "ConfigurationRetrievalError",
    "ConfigurationSource",
    "DictConfigurationSource",
    "ExtConfProperty",
    "FileConfigurationSource",
    "MappingError",
    "MappingResult",
    "MissingExtensionMetadataError",
    "MissingRequiredFieldError",
    "SchemaValidationException",
    "TargetNotInstantiableError",
    "TreeMapper",
    "TreeMapperFactory",
    "TypedExtConfException",
    "TypedExtensionConfigurationProvider",
    "__version__",
    "extension_config",
    "extension_key_of",
    "has_extension_config",
    "scan_package",
]
