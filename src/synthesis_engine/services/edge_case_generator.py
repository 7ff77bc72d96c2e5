"""Domain-flavoured edge cases for an operation's inputs.

Where :mod:`boundary_generator` probes declared limits, this module probes
the semantics a field's name or format implies: enumerations, dates and
times, money amounts and locales.  Each case carries a minimal request
payload with the probe value nested under the field's path.
"""
from __future__ import annotations

import logging
from typing import Any

from src.shared.constants import MAX_SCHEMA_DEPTH
from src.shared.models.operations import ParsedOperation
from src.shared.models.schema import ResolvedSchema
from src.shared.models.test_cases import EdgeTestCase
from src.synthesis_engine.services.schema_resolver import resolve, resolve_property

logger = logging.getLogger(__name__)

CURRENCY_KEYWORDS: tuple[str, ...] = ("price", "amount", "cost", "fee", "currency")
LOCALE_KEYWORDS: tuple[str, ...] = ("locale", "language", "region", "country")
TEMPORAL_FORMATS: frozenset[str] = frozenset({"date", "date-time"})


def generate_edge_cases(operation: ParsedOperation) -> list[EdgeTestCase]:
    """Return the edge cases for the request body and parameters of *operation*."""
    cases: list[EdgeTestCase] = []

    schema = operation.json_request_schema()
    if schema is not None:
        cases.extend(_walk(resolve(schema, "requestBody", is_required=True), "requestBody"))

    for parameter in operation.parameters or []:
        if not isinstance(parameter, dict) or not isinstance(parameter.get("schema"), dict):
            continue
        name = str(parameter.get("name", "param"))
        prefix = "query" if parameter.get("in") == "query" else "parameter"
        cases.extend(_walk(resolve(parameter["schema"], name), f"{prefix}.{name}"))

    logger.debug("Generated %d edge cases for %s", len(cases), operation.key)
    return cases


def build_request_data(field_path: str, value: Any) -> Any:
    """Nest *value* under *field_path*.

    ``requestBody.address.city`` -> ``{"address": {"city": value}}``;
    parameters map to ``{name: value}``.
    """
    parts = field_path.split(".")
    keys = parts[1:] if len(parts) > 1 else []
    if not keys:
        return value if parts[0] == "requestBody" else {parts[0]: value}
    payload: Any = value
    for key in reversed(keys):
        payload = {key: payload}
    return payload


def _walk(resolved: ResolvedSchema, field_path: str) -> list[EdgeTestCase]:
    name = resolved.field_name.lower()
    cases = [
        *_enum_cases(resolved, field_path),
        *_temporal_cases(resolved, name, field_path),
        *_currency_cases(name, field_path),
        *_locale_cases(name, field_path),
    ]
    if (
        resolved.type == "object"
        and resolved.context.depth < MAX_SCHEMA_DEPTH
        and not resolved.context.recursive
    ):
        for prop in resolved.constraints.properties or {}:
            cases.extend(_walk(resolve_property(resolved, prop), f"{field_path}.{prop}"))
    return cases


def _case(
    field_path: str,
    suffix: str,
    description: str,
    category: str,
    scenario: str,
    value: Any,
    expected_status: int,
    provider_state: str,
    expected_error: str | None = None,
) -> EdgeTestCase:
    return EdgeTestCase(
        name=f"{field_path}_{suffix}",
        description=description,
        category=category,
        field=field_path,
        scenario=scenario,
        request_data=build_request_data(field_path, value),
        expected_status=expected_status,
        expected_error=expected_error,
        provider_state=provider_state,
    )


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def _enum_cases(resolved: ResolvedSchema, field: str) -> list[EdgeTestCase]:
    values = resolved.constraints.enum
    if not values:
        return []
    cases = [
        _case(
            field, "invalid_enum_value", f"Test invalid enumeration value for {field}",
            "enum", "Invalid enum value provided", "INVALID_ENUM_VALUE", 400,
            "Invalid enum value handling",
            expected_error="Invalid value. Must be one of: " + ", ".join(str(v) for v in values),
        )
    ]
    first_string = next((v for v in values if isinstance(v, str)), None)
    # An all-uppercase enum value is unchanged by upper-casing
    if first_string is not None and first_string.upper() not in values:
        cases.append(_case(
            field, "enum_case_sensitivity", f"Test case sensitivity for enum {field}",
            "enum", "Wrong case enum value", first_string.upper(), 400,
            "Case sensitive enum validation",
            expected_error="Enum values are case sensitive",
        ))
    cases.append(_case(
        field, "enum_null_value", f"Test null value for required enum {field}",
        "enum", "Null enum value", None, 400, "Null enum value handling",
        expected_error="Enum field cannot be null",
    ))
    return cases


def _temporal_cases(resolved: ResolvedSchema, name: str, field: str) -> list[EdgeTestCase]:
    if resolved.type != "string":
        return []
    if resolved.constraints.format not in TEMPORAL_FORMATS and "date" not in name and "time" not in name:
        return []
    return [
        _case(
            field, "past_date_invalid", f"Test past date for {field}",
            "temporal", "Past date provided when future date expected", "2020-01-01T00:00:00Z",
            400, "Past date validation", expected_error="Date must be in the future",
        ),
        _case(
            field, "far_future_date", f"Test far future date for {field}",
            "temporal", "Far future date (year 2099)", "2099-12-31T23:59:59Z",
            400, "Far future date validation", expected_error="Date too far in the future",
        ),
        _case(
            field, "leap_year_feb_29", f"Test February 29th leap year for {field}",
            "temporal", "Leap year February 29th", "2024-02-29T12:00:00Z",
            200, "Leap year date handling",
        ),
        _case(
            field, "non_leap_year_feb_29", f"Test February 29th non-leap year for {field}",
            "temporal", "Non-leap year February 29th", "2023-02-29T12:00:00Z",
            400, "Invalid leap year date handling",
            expected_error="Invalid date: February 29th in non-leap year",
        ),
        _case(
            field, "timezone_utc_plus_14", f"Test UTC+14 timezone for {field}",
            "temporal", "Maximum timezone offset UTC+14", "2024-01-01T12:00:00+14:00",
            200, "Extreme timezone handling",
        ),
        _case(
            field, "timezone_utc_minus_12", f"Test UTC-12 timezone for {field}",
            "temporal", "Minimum timezone offset UTC-12", "2024-01-01T12:00:00-12:00",
            200, "Extreme timezone handling",
        ),
    ]


def _currency_cases(name: str, field: str) -> list[EdgeTestCase]:
    if not any(keyword in name for keyword in CURRENCY_KEYWORDS):
        return []
    return [
        _case(
            field, "negative_amount", f"Test negative currency amount for {field}",
            "currency", "Negative currency amount", -100.50,
            400, "Negative amount validation", expected_error="Currency amount cannot be negative",
        ),
        _case(
            field, "extremely_large_amount", f"Test extremely large amount for {field}",
            "currency", "Extremely large currency amount", 999999999999.99,
            400, "Maximum amount validation", expected_error="Amount exceeds maximum allowed value",
        ),
        _case(
            field, "high_precision", f"Test high precision currency for {field}",
            "currency", "High precision decimal (more than 2 places)", 100.12345,
            400, "Currency precision validation",
            expected_error="Currency precision cannot exceed 2 decimal places",
        ),
        _case(
            field, "zero_amount", f"Test zero currency amount for {field}",
            "currency", "Zero currency amount", 0.0,
            400, "Zero amount validation", expected_error="Amount must be greater than zero",
        ),
    ]


def _locale_cases(name: str, field: str) -> list[EdgeTestCase]:
    if not any(keyword in name for keyword in LOCALE_KEYWORDS):
        return []
    return [
        _case(
            field, "invalid_locale_format", f"Test invalid locale format for {field}",
            "locale", "Invalid locale format", "invalid_locale",
            400, "Invalid locale format handling",
            expected_error="Invalid locale format. Expected format: en-US",
        ),
        _case(
            field, "unsupported_locale", f"Test unsupported locale for {field}",
            "locale", "Unsupported locale", "xx-XX",
            400, "Unsupported locale handling", expected_error="Unsupported locale",
        ),
        _case(
            field, "locale_case_sensitivity", f"Test locale case sensitivity for {field}",
            "locale", "Incorrect case locale", "EN-us",
            400, "Locale case validation",
            expected_error="Locale must be in correct case format (en-US)",
        ),
    ]
