"""Tests for rendering error scenarios as pytest source."""
from __future__ import annotations

import ast

from src.shared.models.operations import ParsedOperation
from src.synthesis_engine.services.scenario_renderer import render_error_test, render_function_name
from src.synthesis_engine.services.scenario_synthesizer import synthesize_error_cases


def _case(operation, name):
    return next(case for case in synthesize_error_cases(operation) if case.name == name)


class TestRenderFunctionName:
    def test_name(self, get_order_operation):
        case = _case(get_order_operation, "resource_not_found")
        assert render_function_name(get_order_operation, case) == "test_get_orders_id_resource_not_found"

    def test_dotted_path_gives_identifier(self):
        operation = ParsedOperation(
            method="get",
            path="/v1.0/files/{name}.json",
            responses={"200": {"description": "ok"}, "404": {"description": "missing"}},
        )
        case = _case(operation, "resource_not_found")
        name = render_function_name(operation, case)
        assert name == "test_get_v1_0_files_name_json_resource_not_found"
        assert name.isidentifier()
        ast.parse(render_error_test(operation, case))


class TestConsumerRendering:
    def test_is_valid_python(self, create_customer_operation):
        for case in synthesize_error_cases(create_customer_operation):
            ast.parse(render_error_test(create_customer_operation, case))

    def test_pact_interaction(self, get_order_operation):
        source = render_error_test(get_order_operation, _case(get_order_operation, "resource_not_found"))
        assert source.startswith("def test_get_orders_id_resource_not_found(pact):")
        assert "pact.given('resource does not exist')" in source
        assert ".upon_receiving('Request for non-existent resource')" in source
        assert ".with_request(method='GET', path='/orders/{id}')" in source
        assert "404," in source
        assert "'code': 'NOT_FOUND'" in source
        assert "with pact:" in source

    def test_body_modification(self, create_customer_operation):
        source = render_error_test(create_customer_operation, _case(create_customer_operation, "invalid_request_body"))
        assert "body='invalid_json_string'" in source

    def test_headers(self, secured_operation):
        source = render_error_test(secured_operation, _case(secured_operation, "invalid_token"))
        assert "headers={'Authorization': 'Bearer invalid_token_123'}" in source


class TestProviderRendering:
    def test_is_valid_python(self, secured_operation):
        for case in synthesize_error_cases(secured_operation):
            ast.parse(render_error_test(secured_operation, case, is_consumer=False))

    def test_direct_call(self, create_customer_operation):
        case = _case(create_customer_operation, "invalid_request_body")
        source = render_error_test(create_customer_operation, case, is_consumer=False)
        assert "(provider_client):" in source
        assert "provider_client.request('POST', '/customers', content='invalid_json_string')" in source
        assert "assert response.status_code == 400" in source
        assert "pact" not in source
