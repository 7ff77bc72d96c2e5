"""Render :class:`ErrorTestCase` records as pytest source text.

Two flavours share the same case data:

* consumer: a pact-python interaction (``given`` / ``upon_receiving`` /
  ``with_request`` / ``will_respond_with``) against a ``pact`` fixture;
* provider: a direct HTTP call through a ``provider_client`` fixture
  (an ``httpx.Client`` bound to the provider's base URL) with status and
  body assertions.

Rendering is pure string templating; nothing is executed or written.
"""
from __future__ import annotations

import re
from pprint import pformat
from typing import Any

from src.shared.constants import JSON_CONTENT_TYPE
from src.shared.models.operations import ParsedOperation
from src.shared.models.test_cases import ErrorTestCase
from src.shared.utils import sanitize_path


def render_error_test(
    operation: ParsedOperation,
    case: ErrorTestCase,
    is_consumer: bool = True,
) -> str:
    """Return one pytest test function exercising *case* against *operation*."""
    if is_consumer:
        return _render_consumer(operation, case)
    return _render_provider(operation, case)


def render_function_name(operation: ParsedOperation, case: ErrorTestCase) -> str:
    """``test_get_orders_id_resource_not_found``"""
    fragment = re.sub(r"\W", "_", sanitize_path(operation.path)) or "root"
    return f"test_{operation.method.lower()}_{fragment}_{case.name}"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def _render_consumer(operation: ParsedOperation, case: ErrorTestCase) -> str:
    expected = _expected_error(case)
    request_kwargs = _request_kwargs(operation, case)
    lines = [
        f"def {render_function_name(operation, case)}(pact):",
        f'    """should handle {case.name} - {case.description}"""',
        f"    expected_error = {_indent(pformat(expected, sort_dicts=False), 4)}",
        "",
        "    (",
        f"        pact.given({case.provider_state or ''!r})",
        f"        .upon_receiving({case.description!r})",
        f"        .with_request({request_kwargs})",
        "        .will_respond_with(",
        f"            {case.status_code},",
        f"            headers={{'Content-Type': {JSON_CONTENT_TYPE!r}}},",
        "            body=expected_error,",
        "        )",
        "    )",
        "",
        "    with pact:",
        "        # Call the consumer client here and assert it surfaces",
        f"        # a {case.status_code} carrying expected_error.",
        "        pass",
        "",
    ]
    return "\n".join(lines)


def _render_provider(operation: ParsedOperation, case: ErrorTestCase) -> str:
    expected = _expected_error(case)
    request_kwargs = _request_kwargs(operation, case, provider=True)
    lines = [
        f"def {render_function_name(operation, case)}(provider_client):",
        f'    """should handle {case.name} - {case.description}"""',
        f"    # Provider state: {case.provider_state or 'none'}",
        f"    expected_error = {_indent(pformat(expected, sort_dicts=False), 4)}",
        "",
        f"    response = provider_client.request({request_kwargs})",
        "",
        f"    assert response.status_code == {case.status_code}",
        "    body = response.json()",
        "    for key, value in expected_error.items():",
        "        assert body.get(key) == value",
        "",
    ]
    return "\n".join(lines)


def _expected_error(case: ErrorTestCase) -> dict[str, Any]:
    return case.expected_error.model_dump(exclude_none=True)


def _request_kwargs(operation: ParsedOperation, case: ErrorTestCase, provider: bool = False) -> str:
    """Positional method/path followed by header and body keyword arguments."""
    parts = [repr(operation.method), repr(operation.path)]
    modification = case.request_modification
    if modification is not None:
        if modification.add_headers or modification.remove_headers:
            parts.append(f"headers={dict(modification.add_headers or {})!r}")
        if modification.modify_body is not None:
            body = modification.modify_body
            if isinstance(body, str):
                parts.append(f"{'content' if provider else 'body'}={body!r}")
            else:
                parts.append(f"{'json' if provider else 'body'}={body!r}")
    if not provider:
        parts = [f"method={parts[0]}", f"path={parts[1]}", *parts[2:]]
    return ", ".join(parts)


def _indent(text: str, width: int) -> str:
    pad = " " * width
    return text.replace("\n", "\n" + pad)
