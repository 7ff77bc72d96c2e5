"""Performance scenarios for an operation.

Emits :class:`PerformanceTestCase` records describing how a load tool
should exercise the endpoint: normal and peak load, stress (breaking point
and spikes), payload volume, timeouts, concurrent access and retries.

Volume cases only apply to operations that send a body (anything but
``GET``); the deadlock case only applies to ``PUT``, ``PATCH`` and
``DELETE``.  The output depends on the operation alone.
"""
from __future__ import annotations

import logging

from src.shared.models.operations import ParsedOperation
from src.shared.models.test_cases import FailureThreshold, LoadProfile, PerformanceTestCase

logger = logging.getLogger(__name__)

LOCKING_METHODS: frozenset[str] = frozenset({"PUT", "PATCH", "DELETE"})


def generate_performance_tests(operation: ParsedOperation) -> list[PerformanceTestCase]:
    """Return the performance cases for *operation*, grouped by category."""
    label = operation.operation_id or operation.key
    tests = [
        *_load_tests(label),
        *_stress_tests(label),
        *_volume_tests(operation, label),
        *_timeout_tests(label),
        *_concurrency_tests(operation, label),
        *_retry_tests(label),
    ]
    logger.debug("Generated %d performance tests for %s", len(tests), operation.key)
    return tests


def _case(
    name: str,
    description: str,
    category: str,
    scenario: str,
    expected_behavior: str,
    load: LoadProfile,
    threshold: FailureThreshold,
) -> PerformanceTestCase:
    return PerformanceTestCase(
        name=name,
        description=description,
        category=category,
        scenario=scenario,
        load_profile=load,
        expected_behavior=expected_behavior,
        failure_threshold=threshold,
    )


def _load_tests(label: str) -> list[PerformanceTestCase]:
    return [
        _case(
            "normal_load",
            f"Normal load test for {label}",
            "load",
            "Normal expected load",
            "System handles normal load efficiently",
            LoadProfile(concurrency=10, duration_seconds=60, request_count=100),
            FailureThreshold(max_response_time_ms=2000, min_success_rate=0.99, max_error_rate=0.01),
        ),
        _case(
            "peak_load",
            f"Peak load test for {label}",
            "load",
            "Peak expected load",
            "System handles peak load with acceptable performance",
            LoadProfile(concurrency=50, duration_seconds=120, request_count=1000),
            FailureThreshold(max_response_time_ms=5000, min_success_rate=0.95, max_error_rate=0.05),
        ),
    ]


def _stress_tests(label: str) -> list[PerformanceTestCase]:
    return [
        _case(
            "breaking_point",
            f"Find breaking point for {label}",
            "stress",
            "Gradually increasing load until system breaks",
            "System gracefully degrades or fails with proper error responses",
            LoadProfile(concurrency=100, duration_seconds=300, request_count=5000),
            FailureThreshold(max_response_time_ms=10000, min_success_rate=0.50, max_error_rate=0.50),
        ),
        _case(
            "spike_test",
            f"Sudden spike test for {label}",
            "stress",
            "Sudden increase in load",
            "System handles sudden spikes without crashing",
            LoadProfile(concurrency=200, duration_seconds=30, request_count=2000),
            FailureThreshold(max_response_time_ms=15000, min_success_rate=0.70, max_error_rate=0.30),
        ),
    ]


def _volume_tests(operation: ParsedOperation, label: str) -> list[PerformanceTestCase]:
    if operation.method == "GET":
        return []
    return [
        _case(
            "small_payload",
            f"Small payload volume test for {label}",
            "volume",
            "Small payload processing",
            "System processes small payloads efficiently",
            LoadProfile(payload_size="small", concurrency=20, request_count=500),
            FailureThreshold(max_response_time_ms=1000, min_success_rate=0.99),
        ),
        _case(
            "large_payload",
            f"Large payload volume test for {label}",
            "volume",
            "Large payload processing",
            "System handles large payloads without memory issues",
            LoadProfile(payload_size="large", concurrency=5, request_count=50),
            FailureThreshold(max_response_time_ms=30000, min_success_rate=0.95),
        ),
        _case(
            "extreme_payload",
            f"Extreme payload volume test for {label}",
            "volume",
            "Extreme payload size near limits",
            "System rejects or handles extreme payloads gracefully",
            LoadProfile(payload_size="extreme", concurrency=1, request_count=10),
            FailureThreshold(max_response_time_ms=60000, min_success_rate=0.80),
        ),
    ]


def _timeout_tests(label: str) -> list[PerformanceTestCase]:
    return [
        _case(
            "network_timeout",
            f"Network timeout test for {label}",
            "timeout",
            "Network delays and timeouts",
            "System handles network timeouts gracefully",
            LoadProfile(timeout_ms=5000, concurrency=10, request_count=50),
            FailureThreshold(max_response_time_ms=5000, min_success_rate=0.90),
        ),
        _case(
            "processing_timeout",
            f"Processing timeout test for {label}",
            "timeout",
            "Long processing operations",
            "System completes processing within timeout or returns appropriate error",
            LoadProfile(timeout_ms=30000, concurrency=5, request_count=20),
            FailureThreshold(max_response_time_ms=30000, min_success_rate=0.85),
        ),
    ]


def _concurrency_tests(operation: ParsedOperation, label: str) -> list[PerformanceTestCase]:
    tests = [
        _case(
            "race_condition",
            f"Race condition test for {label}",
            "concurrency",
            "Multiple simultaneous operations on same resource",
            "System handles concurrent access without data corruption",
            LoadProfile(concurrency=50, duration_seconds=30, request_count=200),
            FailureThreshold(max_response_time_ms=5000, min_success_rate=0.95),
        )
    ]
    if operation.method in LOCKING_METHODS:
        tests.append(
            _case(
                "deadlock_prevention",
                f"Deadlock prevention test for {label}",
                "concurrency",
                "Potential deadlock scenarios",
                "System prevents deadlocks and completes operations",
                LoadProfile(concurrency=20, duration_seconds=60, request_count=100),
                FailureThreshold(max_response_time_ms=10000, min_success_rate=0.90),
            )
        )
    return tests


def _retry_tests(label: str) -> list[PerformanceTestCase]:
    return [
        _case(
            "retry_logic",
            f"Retry logic test for {label}",
            "retry",
            "Transient failures requiring retries",
            "System retries failed requests according to retry policy",
            LoadProfile(retry_attempts=3, concurrency=10, request_count=100),
            FailureThreshold(max_response_time_ms=15000, min_success_rate=0.90),
        ),
        _case(
            "exponential_backoff",
            f"Exponential backoff test for {label}",
            "retry",
            "Progressive retry delays",
            "System implements exponential backoff for retries",
            LoadProfile(retry_attempts=5, concurrency=5, request_count=50),
            FailureThreshold(max_response_time_ms=30000, min_success_rate=0.85),
        ),
    ]
