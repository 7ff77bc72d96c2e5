"""Field-level boundary probes for an operation's inputs.

Walks the JSON request body (recursing into object properties) and every
parameter schema, and emits :class:`BoundaryTestCase` records on both sides
of each declared limit: numeric bounds, string lengths and formats, array
sizes, null handling and type mismatches.

Field paths are ``requestBody.<prop>[.<prop>...]`` for body fields,
``query.<name>`` for query parameters and ``parameter.<name>`` for the rest.
"""
from __future__ import annotations

import logging
from typing import Any

from src.shared.constants import MAX_SCHEMA_DEPTH
from src.shared.models.operations import ParsedOperation
from src.shared.models.schema import ResolvedSchema
from src.shared.models.test_cases import BoundaryTestCase
from src.synthesis_engine.services.schema_resolver import resolve, resolve_property

logger = logging.getLogger(__name__)

INVALID_FORMAT_VALUES: dict[str, str] = {
    "email": "invalid-email",
    "uri": "not-a-uri",
    "uuid": "not-a-uuid",
    "date": "invalid-date",
    "date-time": "invalid-datetime",
    "ipv4": "999.999.999.999",
    "ipv6": "not-an-ipv6",
    "hostname": "invalid..hostname",
    "json-pointer": "not/a/pointer",
    "regex": "[invalid regex",
}

# One representative value per JSON type
_TYPE_SAMPLES: tuple[tuple[str, Any], ...] = (
    ("string", "test string"),
    ("number", 42),
    ("boolean", True),
    ("array", ["item1", "item2"]),
    ("object", {"key": "value"}),
)

_ERROR_STATUS = 400


def generate_boundary_tests(operation: ParsedOperation) -> list[BoundaryTestCase]:
    """Return the boundary probes for every input of *operation*."""
    tests: list[BoundaryTestCase] = []

    schema = operation.json_request_schema()
    if schema is not None:
        body_required = bool((operation.request_body or {}).get("required", False))
        root = resolve(schema, "requestBody", is_required=body_required)
        tests.extend(_walk(root, "requestBody"))

    for parameter in operation.parameters or []:
        if not isinstance(parameter, dict) or not isinstance(parameter.get("schema"), dict):
            continue
        name = str(parameter.get("name", "param"))
        prefix = "query" if parameter.get("in") == "query" else "parameter"
        resolved = resolve(
            parameter["schema"],
            name,
            is_required=bool(parameter.get("required", parameter.get("in") == "path")),
        )
        tests.extend(_walk(resolved, f"{prefix}.{name}"))

    logger.debug("Generated %d boundary tests for %s", len(tests), operation.key)
    return tests


def _walk(resolved: ResolvedSchema, field_path: str) -> list[BoundaryTestCase]:
    tests = [
        *_numeric(resolved, field_path),
        *_string(resolved, field_path),
        *_array(resolved, field_path),
        *_null(resolved, field_path),
        *_type_mismatch(resolved, field_path),
    ]
    if (
        resolved.type == "object"
        and resolved.context.depth < MAX_SCHEMA_DEPTH
        and not resolved.context.recursive
    ):
        for name in resolved.constraints.properties or {}:
            tests.extend(_walk(resolve_property(resolved, name), f"{field_path}.{name}"))
    return tests


def _valid(name: str, description: str, category: str, field: str, value: Any) -> BoundaryTestCase:
    return BoundaryTestCase(
        name=name,
        description=description,
        category=category,
        field=field,
        value=value,
        expected="valid",
    )


def _invalid(
    name: str,
    description: str,
    category: str,
    field: str,
    value: Any,
    message: str,
) -> BoundaryTestCase:
    return BoundaryTestCase(
        name=name,
        description=description,
        category=category,
        field=field,
        value=value,
        expected="invalid",
        error_code=_ERROR_STATUS,
        error_message=message,
    )


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def _numeric(resolved: ResolvedSchema, field: str) -> list[BoundaryTestCase]:
    if resolved.type not in ("number", "integer"):
        return []
    c = resolved.constraints
    step = 1 if resolved.type == "integer" else 0.1
    tests: list[BoundaryTestCase] = []

    if c.minimum is not None:
        if c.exclusive_minimum is True:
            tests.append(_invalid(
                f"{field}_exclusive_minimum_invalid", f"Test exclusive minimum boundary for {field}",
                "numeric", field, c.minimum, f"Value must be greater than {c.minimum}",
            ))
            tests.append(_valid(
                f"{field}_above_exclusive_minimum", f"Test value above exclusive minimum for {field}",
                "numeric", field, c.minimum + step,
            ))
        else:
            tests.append(_valid(
                f"{field}_minimum_valid", f"Test minimum valid value for {field}",
                "numeric", field, c.minimum,
            ))
        tests.append(_invalid(
            f"{field}_below_minimum", f"Test value below minimum for {field}",
            "numeric", field, c.minimum - 1,
            f"Value must be greater than or equal to {c.minimum}",
        ))
    if _is_number(c.exclusive_minimum):
        tests.append(_invalid(
            f"{field}_exclusive_minimum_invalid", f"Test exclusive minimum boundary for {field}",
            "numeric", field, c.exclusive_minimum, f"Value must be greater than {c.exclusive_minimum}",
        ))
        tests.append(_valid(
            f"{field}_above_exclusive_minimum", f"Test value above exclusive minimum for {field}",
            "numeric", field, c.exclusive_minimum + step,
        ))

    if c.maximum is not None:
        if c.exclusive_maximum is True:
            tests.append(_invalid(
                f"{field}_exclusive_maximum_invalid", f"Test exclusive maximum boundary for {field}",
                "numeric", field, c.maximum, f"Value must be less than {c.maximum}",
            ))
            tests.append(_valid(
                f"{field}_below_exclusive_maximum", f"Test value below exclusive maximum for {field}",
                "numeric", field, c.maximum - step,
            ))
        else:
            tests.append(_valid(
                f"{field}_maximum_valid", f"Test maximum valid value for {field}",
                "numeric", field, c.maximum,
            ))
        tests.append(_invalid(
            f"{field}_above_maximum", f"Test value above maximum for {field}",
            "numeric", field, c.maximum + 1,
            f"Value must be less than or equal to {c.maximum}",
        ))
    if _is_number(c.exclusive_maximum):
        tests.append(_invalid(
            f"{field}_exclusive_maximum_invalid", f"Test exclusive maximum boundary for {field}",
            "numeric", field, c.exclusive_maximum, f"Value must be less than {c.exclusive_maximum}",
        ))
        tests.append(_valid(
            f"{field}_below_exclusive_maximum", f"Test value below exclusive maximum for {field}",
            "numeric", field, c.exclusive_maximum - step,
        ))

    if c.multiple_of:
        tests.append(_valid(
            f"{field}_multiple_of_valid", f"Test valid multiple of {c.multiple_of} for {field}",
            "numeric", field, c.multiple_of * 3,
        ))
        tests.append(_invalid(
            f"{field}_not_multiple_of", f"Test invalid multiple for {field}",
            "numeric", field, c.multiple_of * 2.5, f"Value must be a multiple of {c.multiple_of}",
        ))
    return tests


def _string(resolved: ResolvedSchema, field: str) -> list[BoundaryTestCase]:
    if resolved.type != "string":
        return []
    c = resolved.constraints
    tests: list[BoundaryTestCase] = []

    if c.min_length is not None:
        tests.append(_valid(
            f"{field}_min_length_valid", f"Test minimum length for {field}",
            "string", field, "a" * c.min_length,
        ))
        if c.min_length > 0:
            tests.append(_invalid(
                f"{field}_below_min_length", f"Test below minimum length for {field}",
                "string", field, "a" * (c.min_length - 1),
                f"String must be at least {c.min_length} characters long",
            ))
    if c.max_length is not None:
        tests.append(_valid(
            f"{field}_max_length_valid", f"Test maximum length for {field}",
            "string", field, "a" * c.max_length,
        ))
        tests.append(_invalid(
            f"{field}_above_max_length", f"Test above maximum length for {field}",
            "string", field, "a" * (c.max_length + 1),
            f"String must not exceed {c.max_length} characters",
        ))
    if c.pattern:
        tests.append(_invalid(
            f"{field}_pattern_invalid", f"Test invalid pattern for {field}",
            "string", field, "invalid_pattern_value_123!@#",
            f"Value does not match required pattern: {c.pattern}",
        ))
    if c.format and c.format in INVALID_FORMAT_VALUES:
        tests.append(_invalid(
            f"{field}_invalid_format", f"Test invalid {c.format} format for {field}",
            "string", field, INVALID_FORMAT_VALUES[c.format],
            f"Value must be a valid {c.format}",
        ))
    return tests


def _array(resolved: ResolvedSchema, field: str) -> list[BoundaryTestCase]:
    if resolved.type != "array":
        return []
    c = resolved.constraints
    tests: list[BoundaryTestCase] = []

    if c.min_items is not None:
        tests.append(_valid(
            f"{field}_min_items_valid", f"Test minimum items for {field}",
            "array", field, ["item"] * c.min_items,
        ))
        if c.min_items > 0:
            tests.append(_invalid(
                f"{field}_below_min_items", f"Test below minimum items for {field}",
                "array", field, ["item"] * (c.min_items - 1),
                f"Array must contain at least {c.min_items} items",
            ))
    if c.max_items is not None:
        tests.append(_valid(
            f"{field}_max_items_valid", f"Test maximum items for {field}",
            "array", field, ["item"] * c.max_items,
        ))
        tests.append(_invalid(
            f"{field}_above_max_items", f"Test above maximum items for {field}",
            "array", field, ["item"] * (c.max_items + 1),
            f"Array must not contain more than {c.max_items} items",
        ))
    return tests


def _null(resolved: ResolvedSchema, field: str) -> list[BoundaryTestCase]:
    if resolved.context.is_required and not resolved.constraints.nullable:
        return [_invalid(
            f"{field}_null_required", f"Test null value for required field {field}",
            "null", field, None, f"Field {field} is required",
        )]
    if resolved.constraints.nullable:
        return [_valid(
            f"{field}_null_allowed", f"Test null value for nullable field {field}",
            "null", field, None,
        )]
    return [_valid(
        f"{field}_null_optional", f"Test null value for optional field {field}",
        "null", field, None,
    )]


def _type_mismatch(resolved: ResolvedSchema, field: str) -> list[BoundaryTestCase]:
    expected = resolved.type
    if expected is None:
        return []
    # integer and number accept the same numeric sample
    expected_kind = "number" if expected == "integer" else expected
    tests: list[BoundaryTestCase] = []
    for index, (kind, value) in enumerate(
        (kind, value) for kind, value in _TYPE_SAMPLES if kind != expected_kind
    ):
        tests.append(_invalid(
            f"{field}_type_mismatch_{index}",
            f"Test type mismatch for {field} (expected {expected}, got {kind})",
            "type_mismatch", field, value, f"Expected {expected} but received {kind}",
        ))
    return tests


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
