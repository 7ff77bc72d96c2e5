"""Pact matcher compilation for resolved schemas.

Matchers are Pact v3 shaped dicts keyed by ``pact:matcher:type``:

* ``{"pact:matcher:type": "type", "value": example}``: loose type match
* ``{"pact:matcher:type": "type", "value": [example], "min": n, "max": m}``:
  array whose every element matches *example*
* ``{"pact:matcher:type": "regex", "regex": r, "value": example}``
* ``{"pact:matcher:type": "integer" | "decimal", "value": example}``

Object matchers wrap a plain dict of property matchers in :func:`like`.
String fields go through the same hint tables as the data synthesizer, so a
valid example synthesized for a field satisfies the matcher compiled for it.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from src.shared.constants import MAX_SCHEMA_DEPTH
from src.shared.models.schema import ResolvedSchema
from src.synthesis_engine.services.domain_hints import implied_string_format
from src.synthesis_engine.services.schema_resolver import resolve, resolve_items, resolve_property

logger = logging.getLogger(__name__)

MATCHER_TYPE_KEY = "pact:matcher:type"

UUID_REGEX = r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
EMAIL_REGEX = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
ISO8601_DATETIME_REGEX = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z?$"
ISO8601_DATE_REGEX = r"^\d{4}-\d{2}-\d{2}$"
URL_REGEX = r"^https?://[^\s$.?#].[^\s]*$"
PHONE_REGEX = r"^\+?[\d\s\-\(\)]{10,}$"


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def like(example: Any) -> dict[str, Any]:
    return {MATCHER_TYPE_KEY: "type", "value": example}


def each_like(example: Any, *, min: int = 1, max: int | None = None) -> dict[str, Any]:
    matcher: dict[str, Any] = {MATCHER_TYPE_KEY: "type", "value": [example], "min": min}
    if max is not None:
        matcher["max"] = max
    return matcher


def term(regex: str, example: Any) -> dict[str, Any]:
    return {MATCHER_TYPE_KEY: "regex", "regex": regex, "value": example}


def integer(example: int | None = None) -> dict[str, Any]:
    return {MATCHER_TYPE_KEY: "integer", "value": example if example is not None else 42}


def decimal(example: float | None = None) -> dict[str, Any]:
    return {MATCHER_TYPE_KEY: "decimal", "value": example if example is not None else 3.14}


def boolean(example: bool = True) -> dict[str, Any]:
    return like(example)


def string(example: str | None = None) -> dict[str, Any]:
    return like(example if example else "string")


def uuid(example: str | None = None) -> dict[str, Any]:
    return term(UUID_REGEX, example or "e91e4eee-9b00-4a0e-a6d8-7c25a8b1b0c8")


def email(example: str | None = None) -> dict[str, Any]:
    return term(EMAIL_REGEX, example or "test@example.com")


def iso8601_datetime(example: str | None = None) -> dict[str, Any]:
    return term(ISO8601_DATETIME_REGEX, example or "2023-01-01T12:00:00Z")


def iso8601_date(example: str | None = None) -> dict[str, Any]:
    return term(ISO8601_DATE_REGEX, example or "2023-01-01")


def url(example: str | None = None) -> dict[str, Any]:
    return term(URL_REGEX, example or "https://example.com")


def phone_number(example: str | None = None) -> dict[str, Any]:
    return term(PHONE_REGEX, example or "+1-555-123-4567")


_FORMAT_MATCHERS = {
    "email": email,
    "uri": url,
    "url": url,
    "date": iso8601_date,
    "date-time": iso8601_datetime,
    "uuid": uuid,
    "phone": phone_number,
}


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def compile_matcher(resolved: ResolvedSchema, *, max_depth: int = MAX_SCHEMA_DEPTH) -> dict[str, Any]:
    """Compile the matcher tree for *resolved*.

    Every declared object property is represented, required or not.  Nodes
    deeper than *max_depth*, and nodes that repeat one of their ancestors,
    compile to ``like(None)``.
    """
    if resolved.context.depth > max_depth or resolved.context.recursive:
        return like(None)

    constraints = resolved.constraints
    kind = constraints.type
    if kind == "string":
        return _string_matcher(resolved)
    if kind == "number":
        return decimal() if constraints.format == "float" else like(123.45)
    if kind == "integer":
        return integer()
    if kind == "boolean":
        return boolean()
    if kind == "array":
        if constraints.items is None:
            item_matcher = string()
        else:
            item_matcher = compile_matcher(resolve_items(resolved), max_depth=max_depth)
        return each_like(item_matcher, min=constraints.min_items or 1, max=constraints.max_items)
    if kind == "object":
        return like(
            {
                name: compile_matcher(resolve_property(resolved, name), max_depth=max_depth)
                for name in constraints.properties or {}
            }
        )
    return like(constraints.example)


def _string_matcher(resolved: ResolvedSchema) -> dict[str, Any]:
    constraints = resolved.constraints
    if constraints.format in _FORMAT_MATCHERS and constraints.format != "phone":
        return _FORMAT_MATCHERS[constraints.format]()

    if constraints.pattern:
        return term(constraints.pattern, constraints.example or "pattern_match")

    example = constraints.example if isinstance(constraints.example, str) else None
    if constraints.enum:
        return string(example or str(constraints.enum[0]))

    implied = implied_string_format(resolved.field_name, resolved.context.domain_hints)
    if implied in _FORMAT_MATCHERS:
        return _FORMAT_MATCHERS[implied]()
    return string(example)


def compile_schema(
    schema: Any,
    field_name: str = "field",
    *,
    max_depth: int = MAX_SCHEMA_DEPTH,
) -> dict[str, Any]:
    """Resolve a raw schema node as a root field and compile its matcher."""
    if not schema:
        return like(None)
    return compile_matcher(resolve(schema, field_name, is_required=True), max_depth=max_depth)


def compile_response_matchers(schema: Any) -> dict[str, Any]:
    """Matchers for a response body; ``like({"success": True})`` when no schema is declared."""
    if not schema:
        return like({"success": True})
    return compile_schema(schema)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def matches(matcher: Any, value: Any) -> bool:
    """Evaluate *matcher* against an actual *value*.

    Object matchers check every property present in *value*; properties the
    value omits are tolerated since the matcher tree does not record which
    properties are optional.
    """
    if isinstance(matcher, dict) and MATCHER_TYPE_KEY in matcher:
        kind = matcher[MATCHER_TYPE_KEY]
        expected = matcher.get("value")
        if kind == "regex":
            return isinstance(value, str) and re.search(matcher["regex"], value) is not None
        if kind == "integer":
            return isinstance(value, int) and not isinstance(value, bool)
        if kind == "decimal":
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if kind == "boolean":
            return isinstance(value, bool)
        if kind == "type":
            if "min" in matcher:
                return _matches_array(matcher, value)
            return _matches_type(expected, value)
        logger.warning("Unknown matcher type %r", kind)
        return False
    return _matches_type(matcher, value)


def _matches_array(matcher: dict[str, Any], value: Any) -> bool:
    if not isinstance(value, list):
        return False
    if len(value) < matcher.get("min", 0):
        return False
    maximum = matcher.get("max")
    if maximum is not None and len(value) > maximum:
        return False
    template = matcher["value"][0] if matcher.get("value") else None
    return all(matches(template, item) for item in value)


def _matches_type(expected: Any, value: Any) -> bool:
    if expected is None:
        # like(None) is emitted for untyped nodes
        return True
    if isinstance(expected, dict):
        if not isinstance(value, dict):
            return False
        return all(matches(expected[key], value[key]) for key in expected if key in value)
    if isinstance(expected, list):
        if not isinstance(value, list):
            return False
        if not expected:
            return True
        return all(matches(expected[0], item) for item in value)
    return _json_kind(expected) == _json_kind(value)


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
