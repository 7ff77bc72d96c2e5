"""Health check endpoint for the Synthesis Engine."""
from __future__ import annotations

import time

from fastapi import APIRouter, Request

from src.shared.models.common import HealthStatus
from src.shared.constants import MAX_SCHEMA_DEPTH, VERSION, SYNTHESIS_ENGINE_SERVICE_NAME

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health(request: Request) -> HealthStatus:
    """Health check endpoint."""
    start_time = getattr(request.app.state, "start_time", time.time())
    config = getattr(request.app.state, "config", None)
    return HealthStatus(
        status="healthy",
        service_name=SYNTHESIS_ENGINE_SERVICE_NAME,
        version=VERSION,
        uptime_seconds=time.time() - start_time,
        details={
            "max_schema_depth": config.max_schema_depth if config else MAX_SCHEMA_DEPTH,
            "seeded": bool(config and config.random_seed is not None),
        },
    )
