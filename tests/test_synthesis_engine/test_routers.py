"""Integration tests for the synthesis engine HTTP routers."""
from __future__ import annotations

import sys

import pytest
from fastapi.testclient import TestClient

from tests.conftest import CUSTOMER_SCHEMA, ORDER_SCHEMA


@pytest.fixture
def client(monkeypatch):
    """Create a TestClient for a freshly imported app with a fixed seed."""
    monkeypatch.setenv("SYNTHESIS_RANDOM_SEED", "77")
    # Clear cached modules so the app picks up the environment
    for mod_name in list(sys.modules.keys()):
        if "synthesis_engine" in mod_name:
            del sys.modules[mod_name]
    from src.synthesis_engine.main import app

    with TestClient(app) as c:
        yield c


def _spec_payload():
    return {
        "info": {"title": "Order Service API", "version": "2.1.0"},
        "operations": [
            {
                "method": "post",
                "path": "/customers",
                "requestBody": {"required": True, "content": {"application/json": {"schema": CUSTOMER_SCHEMA}}},
                "responses": {"201": {"description": "Created"}, "429": {"description": "Slow down"}},
            }
        ],
    }


def _operation_payload():
    return {
        "method": "GET",
        "path": "/orders/{id}",
        "responses": {"200": {"content": {"application/json": {"schema": ORDER_SCHEMA}}}},
    }


# ------------------------------------------------------------------
# GET /api/health
# ------------------------------------------------------------------


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service_name"] == "synthesis-engine"
        assert data["details"]["seeded"] is True

    def test_trace_id_header(self, client):
        first = client.get("/api/health").headers["X-Trace-ID"]
        second = client.get("/api/health").headers["X-Trace-ID"]
        assert len(first) == 36
        assert first != second


# ------------------------------------------------------------------
# POST /api/suites
# ------------------------------------------------------------------


class TestSuitesEndpoint:
    def test_build_suite(self, client):
        resp = client.post("/api/suites", json={"spec": _spec_payload()})
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "OrderServiceAPI"
        assert data["tests"][0]["id"] == "post_customers_success"
        assert data["metadata"]["framework"] == "pytest"

    def test_seed_makes_output_reproducible(self, client):
        payload = {"spec": _spec_payload(), "seed": 5}
        first = client.post("/api/suites", json=payload).json()
        second = client.post("/api/suites", json=payload).json()
        assert first["tests"] == second["tests"]

    def test_unsupported_language(self, client):
        resp = client.post("/api/suites", json={"spec": _spec_payload(), "language": "cobol"})
        assert resp.status_code == 422
        assert "cobol" in resp.json()["detail"]

    def test_malformed_spec(self, client):
        resp = client.post("/api/suites", json={"spec": {"operations": []}})
        assert resp.status_code == 422


# ------------------------------------------------------------------
# POST /api/examples
# ------------------------------------------------------------------


class TestExamplesEndpoint:
    def test_valid_example(self, client):
        resp = client.post("/api/examples", json={"schema": ORDER_SCHEMA, "field_name": "order", "seed": 1})
        assert resp.status_code == 200
        data = resp.json()
        assert data["mode"] == "valid"
        assert set(data["value"]) == {"id", "quantity", "status"}
        assert data["matcher"]["pact:matcher:type"] == "type"

    def test_invalid_mode_example(self, client):
        resp = client.post(
            "/api/examples",
            json={"schema": {"type": "integer", "minimum": 1}, "field_name": "quantity", "mode": "invalid"},
        )
        assert resp.status_code == 200
        assert resp.json()["value"] == 0

    def test_unknown_mode(self, client):
        resp = client.post("/api/examples", json={"schema": {"type": "string"}, "mode": "chaotic"})
        assert resp.status_code == 422


# ------------------------------------------------------------------
# POST /api/scenarios, /api/scenarios/render
# ------------------------------------------------------------------


class TestScenariosEndpoint:
    def test_scenarios(self, client):
        resp = client.post("/api/scenarios", json={"operation": _operation_payload()})
        assert resp.status_code == 200
        data = resp.json()
        assert data["operation"] == "GET /orders/{id}"
        assert data["requires_auth"] is False
        assert [case["name"] for case in data["suite"]["basic_errors"]] == [
            "resource_not_found",
            "internal_server_error",
        ]
        performance = data["suite"]["performance_tests"]
        assert [case["category"] for case in performance][:2] == ["load", "load"]
        assert performance[0]["load_profile"]["concurrency"] == 10
        assert "volume" not in {case["category"] for case in performance}

    def test_render_provider(self, client):
        resp = client.post(
            "/api/scenarios/render",
            json={"operation": _operation_payload(), "is_consumer": False},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_consumer"] is False
        assert len(data["tests"]) == 2
        assert data["tests"][0].startswith("def test_get_orders_id_resource_not_found(provider_client):")
