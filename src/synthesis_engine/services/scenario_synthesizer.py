"""Negative-path scenario synthesis.

Derives :class:`ErrorTestCase` records from an operation's declared shape:
authentication failures, request-body validation failures, missing
resources, rate limiting and server errors.  The rules are deterministic;
calling :func:`synthesize_error_cases` twice on the same operation yields the
same list.

Cases whose status the operation does not declare are dropped unless the
status belongs to :data:`BASELINE_ERROR_STATUSES`.
"""
from __future__ import annotations

import logging
from typing import Any

from src.shared.constants import (
    AUTH_INDICATORS,
    BASELINE_ERROR_STATUSES,
    RESOURCE_LOOKUP_METHODS,
)
from src.shared.models.operations import ParsedOperation
from src.shared.models.test_cases import (
    EnhancedErrorTestSuite,
    ErrorTestCase,
    ExpectedError,
    RequestModification,
)
from src.synthesis_engine.services.boundary_generator import generate_boundary_tests
from src.synthesis_engine.services.edge_case_generator import generate_edge_cases
from src.synthesis_engine.services.performance_generator import generate_performance_tests

logger = logging.getLogger(__name__)

# Only the first N required fields / properties are named in validation cases
_FIELD_SAMPLE_SIZE = 2


def synthesize_error_cases(operation: ParsedOperation) -> list[ErrorTestCase]:
    """Return the error cases for *operation*, in rule order, after filtering."""
    cases: list[ErrorTestCase] = []

    if requires_auth(operation):
        cases.extend(_auth_cases())

    schema = operation.json_request_schema()
    if schema is not None:
        cases.extend(_body_validation_cases(schema))

    if operation.path_parameters() and operation.method in RESOURCE_LOOKUP_METHODS:
        cases.append(
            ErrorTestCase(
                name="resource_not_found",
                description="Request for non-existent resource",
                status_code=404,
                expected_error=ExpectedError(
                    status=404, message="Resource not found", code="NOT_FOUND"
                ),
                provider_state="resource does not exist",
            )
        )

    cases.extend(_infrastructure_cases())

    if operation.request_body:
        cases.append(
            ErrorTestCase(
                name="unsupported_media_type",
                description="Request with unsupported content type",
                status_code=415,
                request_modification=RequestModification(
                    add_headers={"Content-Type": "application/xml"}
                ),
                expected_error=ExpectedError(
                    status=415, message="Unsupported media type", code="UNSUPPORTED_MEDIA_TYPE"
                ),
                provider_state="request has unsupported content type",
            )
        )

    kept = [case for case in cases if _is_applicable(operation, case.status_code)]
    logger.debug(
        "Synthesized %d error cases for %s (%d filtered out)",
        len(kept),
        operation.key,
        len(cases) - len(kept),
    )
    return kept


def requires_auth(operation: ParsedOperation) -> bool:
    """Heuristic: does any key or string of the operation mention auth?

    Unset fields are ignored, so a missing ``security`` block does not count
    while an empty one does.
    """
    texts: list[str] = []
    for name, field in ParsedOperation.model_fields.items():
        value = getattr(operation, name)
        if value is None:
            continue
        texts.append(field.alias or name)
        _collect_strings(value, texts, set())
    text = "\n".join(texts).lower()
    return any(indicator in text for indicator in AUTH_INDICATORS)


def build_enhanced_error_suite(operation: ParsedOperation) -> EnhancedErrorTestSuite:
    """Bundle basic error cases with boundary, edge and performance cases."""
    return EnhancedErrorTestSuite(
        basic_errors=synthesize_error_cases(operation),
        boundary_tests=generate_boundary_tests(operation),
        edge_cases=generate_edge_cases(operation),
        performance_tests=generate_performance_tests(operation),
    )


# ---------------------------------------------------------------------------
# Rule groups
# ---------------------------------------------------------------------------


def _collect_strings(value: Any, texts: list[str], seen: set[int]) -> None:
    """Append every dict key and string found under *value* to *texts*."""
    if isinstance(value, str):
        texts.append(value)
        return
    if not isinstance(value, (dict, list, tuple)):
        return
    if id(value) in seen:
        return
    seen.add(id(value))
    if isinstance(value, dict):
        for key, item in value.items():
            texts.append(str(key))
            _collect_strings(item, texts, seen)
    else:
        for item in value:
            _collect_strings(item, texts, seen)


def _is_applicable(operation: ParsedOperation, status_code: int) -> bool:
    return str(status_code) in operation.responses or status_code in BASELINE_ERROR_STATUSES


def _auth_cases() -> list[ErrorTestCase]:
    return [
        ErrorTestCase(
            name="missing_authentication",
            description="Request without authentication token",
            status_code=401,
            request_modification=RequestModification(
                remove_headers=["Authorization", "X-API-Key", "Bearer"]
            ),
            expected_error=ExpectedError(
                status=401, message="Authentication required", code="UNAUTHORIZED"
            ),
            provider_state="user is not authenticated",
        ),
        ErrorTestCase(
            name="invalid_token",
            description="Request with invalid authentication token",
            status_code=401,
            request_modification=RequestModification(
                add_headers={"Authorization": "Bearer invalid_token_123"}
            ),
            expected_error=ExpectedError(
                status=401, message="Invalid authentication token", code="INVALID_TOKEN"
            ),
            provider_state="user has invalid token",
        ),
        ErrorTestCase(
            name="expired_token",
            description="Request with expired authentication token",
            status_code=401,
            request_modification=RequestModification(
                add_headers={"Authorization": "Bearer expired_token_456"}
            ),
            expected_error=ExpectedError(
                status=401, message="Authentication token has expired", code="TOKEN_EXPIRED"
            ),
            provider_state="user has expired token",
        ),
        ErrorTestCase(
            name="insufficient_permissions",
            description="Request with insufficient permissions",
            status_code=403,
            expected_error=ExpectedError(
                status=403,
                message="Insufficient permissions to access this resource",
                code="FORBIDDEN",
            ),
            provider_state="user lacks required permissions",
        ),
    ]


def _body_validation_cases(schema: dict) -> list[ErrorTestCase]:
    cases = [
        ErrorTestCase(
            name="invalid_request_body",
            description="Request with invalid JSON body",
            status_code=400,
            request_modification=RequestModification(modify_body="invalid_json_string"),
            expected_error=ExpectedError(
                status=400, message="Invalid JSON in request body", code="INVALID_JSON"
            ),
            provider_state="request has invalid JSON body",
        )
    ]

    required = schema.get("required")
    if isinstance(required, list) and required:
        missing = [str(name) for name in required[:_FIELD_SAMPLE_SIZE]]
        cases.append(
            ErrorTestCase(
                name="missing_required_fields",
                description="Request missing required fields",
                status_code=400,
                request_modification=RequestModification(remove_body_fields=missing),
                expected_error=ExpectedError(
                    status=400,
                    message="Missing required fields",
                    code="VALIDATION_ERROR",
                    details={"missing_fields": list(missing)},
                ),
                provider_state="request missing required fields",
            )
        )

    properties = schema.get("properties")
    invalid = list(properties)[:_FIELD_SAMPLE_SIZE] if isinstance(properties, dict) else []
    cases.append(
        ErrorTestCase(
            name="invalid_field_types",
            description="Request with invalid field types",
            status_code=400,
            request_modification=RequestModification(invalidate_body_fields=invalid),
            expected_error=ExpectedError(
                status=400, message="Invalid field types in request", code="VALIDATION_ERROR"
            ),
            provider_state="request has invalid field types",
        )
    )
    return cases


def _infrastructure_cases() -> list[ErrorTestCase]:
    return [
        ErrorTestCase(
            name="method_not_allowed",
            description="Request with unsupported HTTP method",
            status_code=405,
            expected_error=ExpectedError(
                status=405, message="Method not allowed", code="METHOD_NOT_ALLOWED"
            ),
            provider_state="endpoint does not support this method",
        ),
        ErrorTestCase(
            name="rate_limit_exceeded",
            description="Request exceeding rate limits",
            status_code=429,
            request_modification=RequestModification(
                add_headers={"X-Rate-Limit-Remaining": "0"}
            ),
            expected_error=ExpectedError(
                status=429,
                message="Rate limit exceeded",
                code="RATE_LIMIT_EXCEEDED",
                details={"retry_after": 60},
            ),
            provider_state="rate limit has been exceeded",
        ),
        ErrorTestCase(
            name="internal_server_error",
            description="Server experiencing internal error",
            status_code=500,
            expected_error=ExpectedError(
                status=500, message="Internal server error", code="INTERNAL_ERROR"
            ),
            provider_state="server is experiencing internal error",
        ),
        ErrorTestCase(
            name="service_unavailable",
            description="Service temporarily unavailable",
            status_code=503,
            expected_error=ExpectedError(
                status=503,
                message="Service temporarily unavailable",
                code="SERVICE_UNAVAILABLE",
                details={"retry_after": 30},
            ),
            provider_state="service is temporarily unavailable",
        ),
    ]
