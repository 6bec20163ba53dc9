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
"""Tests for mapping errors and their aggregation."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from fixtures import MultiNestedTestConfiguration, SimpleTestConfiguration
from typed_extconf import SchemaValidationException
from typed_extconf.mapping.errors import ErrorAggregator, MappingError, MappingErrorKind
from typed_extconf.mapping.schema import describe


def _validation_error(cls: type, data: dict) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        TypeAdapter(cls).validate_python(data)
    return exc_info.value


class TestMappingError:
    def test_describe_with_path(self):
        error = MappingError(path="api.timeout", message="Input should be a valid integer")
        assert error.describe() == "api.timeout: Input should be a valid integer"

    def test_describe_without_path(self):
        assert MappingError(path="", message="broken").describe() == "broken"

    def test_default_kind(self):
        assert MappingError(path="a", message="b").kind is MappingErrorKind.TYPE_CONVERSION


class TestErrorAggregator:
    def test_empty(self):
        aggregator = ErrorAggregator(describe(SimpleTestConfiguration))
        assert not aggregator
        assert len(aggregator) == 0

    def test_add(self):
        aggregator = ErrorAggregator(describe(SimpleTestConfiguration))
        aggregator.add(MappingError(path="basic.integer", message="bad"))
        assert aggregator
        assert [e.path for e in aggregator] == ["basic.integer"]

    def test_validation_error_paths_are_lookup_paths(self):
        exc = _validation_error(SimpleTestConfiguration, {"int_value": "abc", "float_value": "xyz"})
        aggregator = ErrorAggregator(describe(SimpleTestConfiguration))
        aggregator.add_validation_error(exc)

        assert len(aggregator) == 2
        assert [e.path for e in aggregator] == ["basic.integer", "basic.float"]
        assert [e.field for e in aggregator] == ["int_value", "float_value"]
        assert all(e.kind is MappingErrorKind.TYPE_CONVERSION for e in aggregator)
        assert aggregator.errors[0].error_type == "int_parsing"

    def test_nested_locations_are_translated(self):
        exc = _validation_error(
            MultiNestedTestConfiguration,
            {
                "api_configuration": {"timeout": "soon"},
                "security_configuration": {},
                "nested_test_configuration": {},
            },
        )
        aggregator = ErrorAggregator(describe(MultiNestedTestConfiguration))
        aggregator.add_validation_error(exc)

        assert [e.path for e in aggregator] == ["api.timeout"]
        assert aggregator.errors[0].field == "api_configuration.timeout"

    def test_missing_maps_to_missing_required(self):
        exc = _validation_error(MultiNestedTestConfiguration, {})
        aggregator = ErrorAggregator(describe(MultiNestedTestConfiguration))
        aggregator.add_validation_error(exc)
        assert {e.kind for e in aggregator} == {MappingErrorKind.MISSING_REQUIRED}

    def test_to_exception_default_subject(self):
        aggregator = ErrorAggregator(describe(SimpleTestConfiguration))
        aggregator.add(MappingError(path="basic.integer", message="bad"))
        exc = aggregator.to_exception()

        assert isinstance(exc, SchemaValidationException)
        assert str(exc) == 'Failed to map configuration for "SimpleTestConfiguration": basic.integer: bad'
        assert exc.paths() == ["basic.integer"]

    def test_to_exception_custom_subject(self):
        aggregator = ErrorAggregator(describe(SimpleTestConfiguration))
        aggregator.add(MappingError(path="basic.float", message="bad"))
        exc = aggregator.to_exception('extension "test_ext"')
        assert exc.message.startswith('Failed to map configuration for extension "test_ext"')
