"""Router for negative-path scenario endpoints."""
from __future__ import annotations

import asyncio

from fastapi import APIRouter

from src.shared.models.requests import (
    RenderedScenarios,
    ScenarioRenderRequest,
    ScenarioRequest,
    ScenarioResponse,
)
from src.synthesis_engine.services.scenario_renderer import render_error_test
from src.synthesis_engine.services.scenario_synthesizer import (
    build_enhanced_error_suite,
    requires_auth,
    synthesize_error_cases,
)

router = APIRouter(prefix="/api", tags=["scenarios"])


@router.post("/scenarios", response_model=ScenarioResponse)
async def generate_scenarios(body: ScenarioRequest) -> ScenarioResponse:
    """Return the error scenarios, boundary probes and edge cases for one operation."""
    operation = body.operation
    suite = await asyncio.to_thread(build_enhanced_error_suite, operation)
    return ScenarioResponse(
        operation=operation.key,
        requires_auth=requires_auth(operation),
        suite=suite,
    )


@router.post("/scenarios/render", response_model=RenderedScenarios)
async def render_scenarios(body: ScenarioRenderRequest) -> RenderedScenarios:
    """Render every error scenario of one operation as pytest source."""
    operation = body.operation

    def _render() -> list[str]:
        return [
            render_error_test(operation, case, body.is_consumer)
            for case in synthesize_error_cases(operation)
        ]

    tests = await asyncio.to_thread(_render)
    return RenderedScenarios(operation=operation.key, is_consumer=body.is_consumer, tests=tests)
