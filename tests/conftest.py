"""Shared test fixtures for the synthesis engine test suite."""
from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from src.shared.models.operations import ParsedOperation, ParsedSpec, SpecInfo
from src.synthesis_engine.services.data_synthesizer import SynthesisOptions

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

ORDER_SCHEMA = {
    "type": "object",
    "required": ["id", "quantity", "status"],
    "properties": {
        "id": {"type": "string", "format": "uuid"},
        "quantity": {"type": "integer", "minimum": 1, "maximum": 100},
        "status": {"type": "string", "enum": ["pending", "shipped", "delivered"]},
        "note": {"type": "string", "maxLength": 140},
        "total_price": {"type": "number", "minimum": 0},
        "created_date": {"type": "string", "format": "date"},
    },
}

CUSTOMER_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "email"],
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string", "minLength": 1, "maxLength": 50},
        "email": {"type": "string", "format": "email"},
        "country": {"type": "string"},
        "tags": {"type": "array", "items": {"type": "string"}, "minItems": 1, "maxItems": 5},
    },
}


def _json_body(schema: dict) -> dict:
    return {"content": {"application/json": {"schema": schema}}}


@pytest.fixture
def rng() -> random.Random:
    """A seeded random source so example data is reproducible."""
    return random.Random(1234)


@pytest.fixture
def options() -> SynthesisOptions:
    return SynthesisOptions(now=FIXED_NOW)


@pytest.fixture
def get_order_operation() -> ParsedOperation:
    """GET /orders/{id} with only a 200 response and no auth indicators."""
    return ParsedOperation(
        method="GET",
        path="/orders/{id}",
        summary="Fetch an order",
        responses={"200": {"description": "OK", **_json_body(ORDER_SCHEMA)}},
    )


@pytest.fixture
def create_customer_operation() -> ParsedOperation:
    """POST /customers with a JSON body and a declared 429."""
    return ParsedOperation(
        method="post",
        path="/customers",
        operationId="createCustomer",
        tags=["customers"],
        requestBody={"required": True, **_json_body(CUSTOMER_SCHEMA)},
        responses={
            "201": {"description": "Created", **_json_body(CUSTOMER_SCHEMA)},
            "400": {"description": "Bad request"},
            "429": {"description": "Too many requests"},
        },
    )


@pytest.fixture
def secured_operation() -> ParsedOperation:
    return ParsedOperation(
        method="DELETE",
        path="/orders/{id}",
        security=[{"bearerAuth": []}],
        parameters=[
            {"name": "id", "in": "path", "required": True, "schema": {"type": "string", "format": "uuid"}},
        ],
        responses={"204": {"description": "Deleted"}, "403": {"description": "Forbidden"}},
    )


@pytest.fixture
def sample_spec(get_order_operation, create_customer_operation) -> ParsedSpec:
    return ParsedSpec(
        info=SpecInfo(title="Order Service API", version="2.1.0"),
        operations=[get_order_operation, create_customer_operation],
    )


def recursive_schema() -> dict:
    """A tree node whose ``child`` and ``children`` items are the node itself."""
    node: dict = {
        "type": "object",
        "required": ["label"],
        "properties": {
            "label": {"type": "string", "minLength": 1, "maxLength": 20},
            "weight": {"type": "integer", "minimum": 0, "maximum": 10},
        },
    }
    node["properties"]["child"] = node
    node["properties"]["children"] = {"type": "array", "items": node}
    return node


@pytest.fixture
def recursive_operation() -> ParsedOperation:
    """POST /nodes whose request and response bodies refer to themselves."""
    schema = recursive_schema()
    return ParsedOperation(
        method="POST",
        path="/nodes",
        operationId="createNode",
        requestBody={"required": True, **_json_body(schema)},
        responses={"201": {"description": "Created", **_json_body(schema)}},
    )
