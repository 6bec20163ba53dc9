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
"""Mapping engine: path lookup, coercion, field descriptors and the mapper."""

from typed_extconf.mapping.coercion import ScalarKind, coerce, to_bool
from typed_extconf.mapping.errors import ErrorAggregator, MappingError, MappingErrorKind
from typed_extconf.mapping.mapper import ConfigurationMapper, MappingResult
from typed_extconf.mapping.paths import ABSENT, resolve_path
from typed_extconf.mapping.schema import (
    FieldDescriptor,
    FieldMetadata,
    TargetType,
    describe,
    is_nested_mappable,
    resolve_metadata,
)
from typed_extconf.mapping.tree_mapper import TreeMapper, TreeMapperFactory

__all__ = [
    "ABSENT",
    "ConfigurationMapper",
    "ErrorAggregator",
    "FieldDescriptor",
    "FieldMetadata",
    "MappingError",
    "MappingErrorKind",
    "MappingResult",
    "ScalarKind",
    "TargetType",
    "TreeMapper",
    "TreeMapperFactory",
    "coerce",
    "describe",
    "is_nested_mappable",
    "resolve_metadata",
    "resolve_path",
    "to_bool",
]
