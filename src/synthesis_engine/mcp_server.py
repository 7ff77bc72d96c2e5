"""MCP server for the Synthesis Engine service.

Exposes example synthesis, error-scenario generation and test-suite
building as MCP tools over stdio transport.  All tools delegate to the
service layer and report caller mistakes as ``{"error": "..."}`` dicts.
"""
from __future__ import annotations

import logging
import random
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError as PydanticValidationError

from src.shared.config import SynthesisEngineConfig
from src.shared.errors import AppError
from src.shared.models.operations import ParsedOperation, ParsedSpec
from src.synthesis_engine.services.data_synthesizer import SynthesisOptions, synthesize_from_schema
from src.synthesis_engine.services.matcher_compiler import compile_schema
from src.synthesis_engine.services.scenario_renderer import render_error_test
from src.synthesis_engine.services.scenario_synthesizer import (
    build_enhanced_error_suite,
    requires_auth,
)
from src.synthesis_engine.services.test_suite_builder import TestSuiteBuilder

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# MCP application
# ---------------------------------------------------------------------------
mcp = FastMCP("Synthesis Engine")

_config = SynthesisEngineConfig()


def _rng(seed: int | None) -> random.Random:
    return random.Random(seed if seed is not None else _config.random_seed)


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------


@mcp.tool()
def synthesize_example(
    schema: dict,
    field_name: str = "field",
    mode: str = "valid",
    include_optional: bool = False,
    seed: int | None = None,
) -> dict:
    """Synthesize an example value for a JSON Schema node.

    Args:
        schema: JSON Schema / OpenAPI schema object (dereferenced).
        field_name: Field name used for domain-hint classification.
        mode: One of "valid", "invalid", "edge", "boundary".
        include_optional: Include optional object properties.
        seed: Seed for reproducible output.

    Returns:
        ``{"mode", "value", "matcher"}``, or ``{"error": "..."}`` for an
        unknown mode.
    """
    try:
        options = SynthesisOptions(
            include_optional=include_optional,
            max_depth=_config.max_schema_depth,
        )
        value = synthesize_from_schema(schema, field_name, mode, rng=_rng(seed), options=options)
        matcher = compile_schema(schema, field_name, max_depth=_config.max_schema_depth)
        return {"mode": mode, "value": value, "matcher": matcher}
    except AppError as exc:
        return {"error": str(exc)}


@mcp.tool()
def generate_error_scenarios(
    operation: dict,
    render: bool = False,
    is_consumer: bool = True,
) -> dict:
    """Derive negative-path scenarios for one API operation.

    Args:
        operation: Parsed operation (``method``, ``path``, ``requestBody``,
            ``responses``, ...).
        render: Also return pytest source for each basic error case.
        is_consumer: Render consumer (pact) tests rather than provider tests.

    Returns:
        ``{"operation", "requires_auth", "suite"[, "rendered"]}``.
    """
    try:
        parsed = ParsedOperation.model_validate(operation)
    except PydanticValidationError as exc:
        return {"error": f"Invalid operation: {exc.error_count()} validation error(s)"}

    suite = build_enhanced_error_suite(parsed)
    result: dict[str, Any] = {
        "operation": parsed.key,
        "requires_auth": requires_auth(parsed),
        "suite": suite.model_dump(mode="json"),
    }
    if render:
        result["rendered"] = [
            render_error_test(parsed, case, is_consumer) for case in suite.basic_errors
        ]
    return result


@mcp.tool()
def build_test_suite(
    spec: dict,
    language: str | None = None,
    framework: str | None = None,
    is_provider_mode: bool = False,
    seed: int | None = None,
) -> dict:
    """Build the full contract test suite for an ingested API description.

    Args:
        spec: Parsed spec (``info`` plus ``operations``).
        language: Target language (defaults from configuration).
        framework: Target framework (defaults from configuration).
        is_provider_mode: Generate provider-verification suite metadata.
        seed: Seed for reproducible example data.

    Returns:
        The suite as a JSON-serialisable dict, or ``{"error": "..."}``.
    """
    try:
        parsed = ParsedSpec.model_validate(spec)
    except PydanticValidationError as exc:
        return {"error": f"Invalid spec: {exc.error_count()} validation error(s)"}
    try:
        builder = TestSuiteBuilder(config=_config, rng=_rng(seed))
        suite = builder.build(parsed, language, framework, is_provider_mode)
    except AppError as exc:
        return {"error": str(exc)}
    logger.info("Built suite %s with %d tests via MCP", suite.name, len(suite.tests))
    return suite.model_dump(mode="json")


if __name__ == "__main__":
    mcp.run()
