"""Tests for field-level boundary probes."""
from __future__ import annotations

import pytest

from src.shared.models.operations import ParsedOperation
from src.synthesis_engine.services.boundary_generator import generate_boundary_tests


def _body_operation(schema: dict, required: bool = True) -> ParsedOperation:
    return ParsedOperation(
        method="POST",
        path="/things",
        requestBody={"required": required, "content": {"application/json": {"schema": schema}}},
    )


def _by_name(tests):
    return {test.name: test for test in tests}


class TestBodyWalk:
    def test_fields_are_prefixed(self, create_customer_operation):
        fields = {test.field for test in generate_boundary_tests(create_customer_operation)}
        assert fields == {
            "requestBody",
            "requestBody.id",
            "requestBody.name",
            "requestBody.email",
            "requestBody.country",
            "requestBody.tags",
        }

    def test_string_lengths(self, create_customer_operation):
        tests = _by_name(generate_boundary_tests(create_customer_operation))
        assert tests["requestBody.name_min_length_valid"].value == "a"
        assert tests["requestBody.name_below_min_length"].value == ""
        assert tests["requestBody.name_below_min_length"].error_code == 400
        assert tests["requestBody.name_max_length_valid"].value == "a" * 50
        assert tests["requestBody.name_above_max_length"].value == "a" * 51

    def test_invalid_format(self, create_customer_operation):
        tests = _by_name(generate_boundary_tests(create_customer_operation))
        assert tests["requestBody.email_invalid_format"].value == "invalid-email"

    def test_array_sizes(self, create_customer_operation):
        tests = _by_name(generate_boundary_tests(create_customer_operation))
        assert tests["requestBody.tags_below_min_items"].value == []
        assert len(tests["requestBody.tags_above_max_items"].value) == 6

    def test_null_handling(self, create_customer_operation):
        tests = _by_name(generate_boundary_tests(create_customer_operation))
        assert tests["requestBody_null_required"].expected == "invalid"
        assert tests["requestBody.id_null_required"].expected == "invalid"
        assert tests["requestBody.country_null_optional"].expected == "valid"

    def test_optional_body_root(self):
        tests = _by_name(generate_boundary_tests(_body_operation({"type": "object"}, required=False)))
        assert "requestBody_null_optional" in tests

    def test_nullable_field(self):
        schema = {"type": "object", "required": ["note"], "properties": {"note": {"type": ["string", "null"]}}}
        tests = _by_name(generate_boundary_tests(_body_operation(schema)))
        assert tests["requestBody.note_null_allowed"].expected == "valid"

    def test_nested_objects(self):
        schema = {
            "type": "object",
            "properties": {"address": {"type": "object", "properties": {"zip": {"type": "string", "maxLength": 5}}}},
        }
        tests = _by_name(generate_boundary_tests(_body_operation(schema)))
        assert tests["requestBody.address.zip_above_max_length"].value == "a" * 6


class TestNumericBounds:
    def test_inclusive(self):
        schema = {"type": "object", "properties": {"qty": {"type": "integer", "minimum": 1, "maximum": 10}}}
        tests = _by_name(generate_boundary_tests(_body_operation(schema)))
        assert tests["requestBody.qty_minimum_valid"].value == 1
        assert tests["requestBody.qty_below_minimum"].value == 0
        assert tests["requestBody.qty_maximum_valid"].value == 10
        assert tests["requestBody.qty_above_maximum"].value == 11

    def test_boolean_exclusive(self):
        schema = {
            "type": "object",
            "properties": {"qty": {"type": "integer", "minimum": 0, "exclusiveMinimum": True}},
        }
        tests = _by_name(generate_boundary_tests(_body_operation(schema)))
        assert tests["requestBody.qty_exclusive_minimum_invalid"].value == 0
        assert tests["requestBody.qty_above_exclusive_minimum"].value == 1

    def test_numeric_exclusive(self):
        schema = {"type": "object", "properties": {"ratio": {"type": "number", "exclusiveMaximum": 1}}}
        tests = _by_name(generate_boundary_tests(_body_operation(schema)))
        assert tests["requestBody.ratio_exclusive_maximum_invalid"].value == 1
        assert tests["requestBody.ratio_below_exclusive_maximum"].value == pytest.approx(0.9)

    def test_multiple_of(self):
        schema = {"type": "object", "properties": {"step": {"type": "integer", "multipleOf": 4}}}
        tests = _by_name(generate_boundary_tests(_body_operation(schema)))
        assert tests["requestBody.step_multiple_of_valid"].value == 12
        assert tests["requestBody.step_not_multiple_of"].value == 10


class TestTypeMismatch:
    def test_integer_excludes_numeric_sample(self):
        schema = {"type": "object", "properties": {"qty": {"type": "integer"}}}
        tests = [
            test for test in generate_boundary_tests(_body_operation(schema))
            if test.field == "requestBody.qty" and test.category == "type_mismatch"
        ]
        assert [test.value for test in tests] == ["test string", True, ["item1", "item2"], {"key": "value"}]
        assert [test.name for test in tests] == [f"requestBody.qty_type_mismatch_{i}" for i in range(4)]

    def test_untyped_field_has_no_mismatch(self):
        schema = {"type": "object", "properties": {"blob": {}}}
        tests = generate_boundary_tests(_body_operation(schema))
        assert not [t for t in tests if t.field == "requestBody.blob" and t.category == "type_mismatch"]


class TestParameters:
    def test_path_parameter(self, secured_operation):
        tests = _by_name(generate_boundary_tests(secured_operation))
        assert tests["parameter.id_invalid_format"].value == "not-a-uuid"
        assert tests["parameter.id_null_required"].expected == "invalid"

    def test_query_parameter(self):
        operation = ParsedOperation(
            method="GET",
            path="/orders",
            parameters=[{"name": "limit", "in": "query", "schema": {"type": "integer", "maximum": 50}}],
        )
        tests = _by_name(generate_boundary_tests(operation))
        assert tests["query.limit_above_maximum"].value == 51
        assert tests["query.limit_null_optional"].expected == "valid"

    def test_no_inputs(self, get_order_operation):
        assert generate_boundary_tests(get_order_operation) == []


class TestRecursiveSchemas:
    def test_self_reference_is_walked_once(self, recursive_operation):
        fields = {test.field for test in generate_boundary_tests(recursive_operation)}
        assert fields == {
            "requestBody",
            "requestBody.label",
            "requestBody.weight",
            "requestBody.child",
            "requestBody.children",
        }

    def test_repeated_node_still_gets_its_own_tests(self, recursive_operation):
        tests = _by_name(generate_boundary_tests(recursive_operation))
        assert tests["requestBody.child_null_optional"].expected == "valid"
        assert tests["requestBody.child_type_mismatch_0"].value == "test string"
