"""Tests for performance scenario generation."""
from __future__ import annotations

import pytest

from src.shared.models.operations import ParsedOperation
from src.synthesis_engine.services.performance_generator import generate_performance_tests


def _names(tests):
    return [test.name for test in tests]


class TestGeneratePerformanceTests:
    def test_read_operation(self, get_order_operation):
        tests = generate_performance_tests(get_order_operation)
        assert _names(tests) == [
            "normal_load",
            "peak_load",
            "breaking_point",
            "spike_test",
            "network_timeout",
            "processing_timeout",
            "race_condition",
            "retry_logic",
            "exponential_backoff",
        ]

    def test_body_operation_adds_volume(self, create_customer_operation):
        tests = generate_performance_tests(create_customer_operation)
        volume = [test for test in tests if test.category == "volume"]
        assert [test.load_profile.payload_size for test in volume] == ["small", "large", "extreme"]
        assert "deadlock_prevention" not in _names(tests)
        assert len(tests) == 12

    @pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
    def test_locking_methods_add_deadlock_case(self, method):
        tests = generate_performance_tests(ParsedOperation(method=method, path="/orders/{id}"))
        concurrency = [test.name for test in tests if test.category == "concurrency"]
        assert concurrency == ["race_condition", "deadlock_prevention"]

    def test_thresholds(self, get_order_operation):
        tests = {test.name: test for test in generate_performance_tests(get_order_operation)}
        normal = tests["normal_load"]
        assert normal.load_profile.concurrency == 10
        assert normal.load_profile.duration_seconds == 60
        assert normal.load_profile.request_count == 100
        assert normal.failure_threshold.max_response_time_ms == 2000
        assert normal.failure_threshold.min_success_rate == 0.99
        assert tests["exponential_backoff"].load_profile.retry_attempts == 5
        assert tests["network_timeout"].load_profile.timeout_ms == 5000

    def test_description_uses_operation_id(self, create_customer_operation, get_order_operation):
        assert generate_performance_tests(create_customer_operation)[0].description == (
            "Normal load test for createCustomer"
        )
        assert generate_performance_tests(get_order_operation)[0].description == (
            "Normal load test for GET /orders/{id}"
        )

    def test_deterministic(self, create_customer_operation):
        assert generate_performance_tests(create_customer_operation) == generate_performance_tests(
            create_customer_operation
        )
