"""Router for test-suite building and example synthesis endpoints."""
from __future__ import annotations

import asyncio
import random

from fastapi import APIRouter, Request

from src.shared.config import SynthesisEngineConfig
from src.shared.models.requests import ExampleRequest, ExampleResponse, SuiteRequest
from src.shared.models.test_cases import TestSuite
from src.synthesis_engine.services.data_synthesizer import SynthesisOptions, synthesize_from_schema
from src.synthesis_engine.services.matcher_compiler import compile_schema
from src.synthesis_engine.services.test_suite_builder import TestSuiteBuilder

router = APIRouter(prefix="/api", tags=["suites"])


def _config(request: Request) -> SynthesisEngineConfig:
    config = getattr(request.app.state, "config", None)
    return config if config is not None else SynthesisEngineConfig()


def _rng(seed: int | None, config: SynthesisEngineConfig) -> random.Random:
    return random.Random(seed if seed is not None else config.random_seed)


@router.post("/suites", response_model=TestSuite, status_code=200)
async def build_suite(body: SuiteRequest, request: Request) -> TestSuite:
    """Build the contract test suite for an ingested API description.

    Returns 422 when the language / framework combination is unsupported.
    """
    config = _config(request)
    builder = TestSuiteBuilder(config=config, rng=_rng(body.seed, config))
    return await asyncio.to_thread(
        builder.build,
        body.spec,
        body.language,
        body.framework,
        body.is_provider_mode,
    )


@router.post("/examples", response_model=ExampleResponse)
async def synthesize_example(body: ExampleRequest, request: Request) -> ExampleResponse:
    """Synthesize one example for a schema, alongside its Pact matcher."""
    config = _config(request)
    options = SynthesisOptions(
        include_optional=body.include_optional,
        max_depth=config.max_schema_depth,
    )

    def _run() -> ExampleResponse:
        value = synthesize_from_schema(
            body.json_schema,
            body.field_name,
            body.mode,
            rng=_rng(body.seed, config),
            options=options,
        )
        matcher = compile_schema(
            body.json_schema, body.field_name, max_depth=config.max_schema_depth
        )
        return ExampleResponse(mode=body.mode, value=value, matcher=matcher)

    return await asyncio.to_thread(_run)
