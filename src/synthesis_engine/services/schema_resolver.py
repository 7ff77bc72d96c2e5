"""Schema resolution: one JSON Schema node -> :class:`ResolvedSchema`.

Resolution flattens composition keywords, copies type-level keywords into
:class:`SchemaConstraints`, extends the parent's field path, depth and
lineage, and attaches the domain hints for the field.  Inputs are never mutated and
missing or malformed nodes resolve to a typeless constraint set instead of
raising; downstream code treats a ``None`` type as "emit a placeholder".
"""
from __future__ import annotations

import logging
from typing import Any

from src.shared.models.schema import ResolvedSchema, SchemaConstraints, SchemaContext
from src.synthesis_engine.services.domain_hints import classify

logger = logging.getLogger(__name__)

# Keywords copied verbatim from the (flattened) node
_CONSTRAINT_KEYS: tuple[str, ...] = (
    "type",
    "format",
    "pattern",
    "enum",
    "minLength",
    "maxLength",
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
    "multipleOf",
    "minItems",
    "maxItems",
    "uniqueItems",
    "items",
    "properties",
    "required",
    "example",
    "nullable",
    "description",
    "readOnly",
    "writeOnly",
    "deprecated",
)

_COMPOSITION_DEPTH_LIMIT = 10


def resolve(
    schema: Any,
    field_name: str = "field",
    parent: SchemaContext | None = None,
    *,
    is_required: bool = False,
    parent_type: str | None = None,
) -> ResolvedSchema:
    """Resolve *schema* as the child *field_name* of *parent*.

    A root node (``parent is None``) sits at depth 0 with a one-element
    field path; every child is one level deeper than its parent.  A node
    that is the same object as one of its ancestors is marked
    ``context.recursive``; walkers stop there.
    """
    node = _flatten(schema)
    constraints = _build_constraints(node)

    if parent is None:
        field_path: tuple[str, ...] = (field_name,)
        depth = 0
        ancestors: tuple[int, ...] = ()
    else:
        field_path = (*parent.field_path, field_name)
        depth = parent.depth + 1
        ancestors = parent.lineage

    context = SchemaContext(
        field_path=field_path,
        depth=depth,
        is_required=is_required,
        domain_hints=tuple(classify(field_name, constraints.format, constraints.pattern)),
        parent_type=parent_type,
        lineage=(*ancestors, id(schema)),
        recursive=isinstance(schema, dict) and id(schema) in ancestors,
    )
    return ResolvedSchema(constraints=constraints, context=context)


def resolve_property(parent: ResolvedSchema, name: str) -> ResolvedSchema:
    """Resolve the declared property *name* of an object schema."""
    properties = parent.constraints.properties or {}
    return resolve(
        properties.get(name),
        name,
        parent.context,
        is_required=name in parent.constraints.required,
        parent_type=parent.type,
    )


def resolve_items(parent: ResolvedSchema) -> ResolvedSchema:
    """Resolve the ``items`` sub-schema of an array schema."""
    return resolve(
        parent.constraints.items,
        item_field_name(parent.field_name),
        parent.context,
        is_required=True,
        parent_type=parent.type,
    )


def item_field_name(parent_name: str) -> str:
    """Name under which array items are classified (``tags`` -> ``tags_item``)."""
    return f"{parent_name}_item"


def get_boundary_values(constraints: SchemaConstraints) -> list[Any]:
    """Enumerate the on-boundary values implied by *constraints*.

    Only values that still satisfy the constraints are returned; the
    off-by-one probes belong to the boundary test generator.  Array
    boundaries contain placeholder items; callers that need realistic items
    build them from the ``items`` schema themselves.
    """
    values: list[Any] = []
    kind = constraints.type

    if kind == "string":
        if constraints.min_length is not None:
            values.append("A" * constraints.min_length)
        if constraints.max_length is not None:
            values.append("A" * constraints.max_length)
    elif kind in ("number", "integer"):
        lower = lower_bound(constraints)
        upper = upper_bound(constraints)
        if lower is not None:
            values.append(lower)
        if upper is not None:
            values.append(upper)
    elif kind == "array":
        if constraints.min_items is not None:
            values.append(["item"] * constraints.min_items)
        if constraints.max_items is not None:
            values.append(["item"] * constraints.max_items)

    if constraints.enum:
        values.append(constraints.enum[0])
        if len(constraints.enum) > 1:
            values.append(constraints.enum[-1])

    return values


def lower_bound(constraints: SchemaConstraints) -> float | int | None:
    """Smallest admissible number, honouring both exclusive-bound styles."""
    step = 1 if constraints.type == "integer" else 0.01
    exclusive = constraints.exclusive_minimum
    # OpenAPI 3.1: exclusiveMinimum is itself the (exclusive) bound
    if _is_number(exclusive):
        candidate = exclusive + step
        if constraints.minimum is not None:
            return max(candidate, constraints.minimum)
        return candidate
    if constraints.minimum is None:
        return None
    if exclusive is True:
        return constraints.minimum + step
    return constraints.minimum


def upper_bound(constraints: SchemaConstraints) -> float | int | None:
    """Largest admissible number, honouring both exclusive-bound styles."""
    step = 1 if constraints.type == "integer" else 0.01
    exclusive = constraints.exclusive_maximum
    if _is_number(exclusive):
        candidate = exclusive - step
        if constraints.maximum is not None:
            return min(candidate, constraints.maximum)
        return candidate
    if constraints.maximum is None:
        return None
    if exclusive is True:
        return constraints.maximum - step
    return constraints.maximum


# ------------------------------------------------------------------
# Internals
# ------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_dict(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _flatten(schema: Any, level: int = 0) -> dict[str, Any]:
    """Collapse ``$ref``/``allOf``/``oneOf``/``anyOf`` into one plain node."""
    if not isinstance(schema, dict):
        return {}

    if level >= _COMPOSITION_DEPTH_LIMIT:
        logger.debug("Composition nesting limit reached; truncating schema")
        return {}

    if "$ref" in schema:
        # Ingestion dereferences documents; a surviving $ref is unresolvable.
        return {"description": f"Reference: {schema['$ref']}"}

    all_of = schema.get("allOf")
    if isinstance(all_of, list) and all_of:
        merged: dict[str, Any] = {k: v for k, v in schema.items() if k != "allOf"}
        properties: dict[str, Any] = _as_dict(merged.get("properties"))
        required: list[str] = _as_list(merged.get("required"))
        for sub_schema in all_of:
            resolved = _flatten(sub_schema, level + 1)
            merged.update({k: v for k, v in resolved.items() if k not in ("properties", "required")})
            properties.update(_as_dict(resolved.get("properties")))
            for name in _as_list(resolved.get("required")):
                if name not in required:
                    required.append(name)
        if properties:
            merged["properties"] = properties
        if required:
            merged["required"] = required
        return merged

    for keyword in ("oneOf", "anyOf"):
        options = schema.get(keyword)
        if isinstance(options, list) and options:
            base = {k: v for k, v in schema.items() if k not in ("oneOf", "anyOf")}
            base.update(_flatten(options[0], level + 1))
            return base

    return schema


def _build_constraints(node: dict[str, Any]) -> SchemaConstraints:
    data: dict[str, Any] = {key: node[key] for key in _CONSTRAINT_KEYS if key in node}
    examples = node.get("examples")
    if "example" not in data and isinstance(examples, list) and examples:
        data["example"] = examples[0]

    schema_type = data.get("type")
    if isinstance(schema_type, list):
        # JSON Schema 2020-12 / OpenAPI 3.1 type unions
        concrete = [t for t in schema_type if t != "null"]
        if "null" in schema_type:
            data["nullable"] = True
        data["type"] = concrete[0] if concrete else None
    elif schema_type is not None and not isinstance(schema_type, str):
        data["type"] = None

    if data.get("type") is None:
        if isinstance(data.get("properties"), dict):
            data["type"] = "object"
        elif "items" in data:
            data["type"] = "array"

    if not isinstance(data.get("properties"), dict):
        data.pop("properties", None)
    if not isinstance(data.get("required"), list):
        data.pop("required", None)
    else:
        data["required"] = [name for name in data["required"] if isinstance(name, str)]
    if not isinstance(data.get("enum"), list):
        data.pop("enum", None)

    try:
        return SchemaConstraints.model_validate(data)
    except ValueError as exc:
        # Keywords of the wrong JSON type (e.g. "minLength": "3"): keep only the type.
        logger.warning("Ignoring malformed schema keywords: %s", exc)
        return SchemaConstraints(type=data.get("type") if isinstance(data.get("type"), str) else None)
