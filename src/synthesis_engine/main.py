"""Synthesis Engine service FastAPI application."""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.shared.config import SynthesisEngineConfig
from src.shared.constants import INTERNAL_PORT, VERSION, SYNTHESIS_ENGINE_SERVICE_NAME
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware, setup_logging

config = SynthesisEngineConfig()
logger = setup_logging(SYNTHESIS_ENGINE_SERVICE_NAME, config.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - record start time and expose config."""
    app.state.start_time = time.time()
    app.state.config = config

    logger.info(
        "Service started: name=%s version=%s port=%d max_depth=%d",
        SYNTHESIS_ENGINE_SERVICE_NAME, VERSION, INTERNAL_PORT, config.max_schema_depth,
    )
    yield

    logger.info("Service stopped: name=%s", SYNTHESIS_ENGINE_SERVICE_NAME)


app = FastAPI(
    title="Synthesis Engine",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(TraceIDMiddleware)
register_exception_handlers(app)

# Register all routers
from src.synthesis_engine.routers.health import router as health_router
from src.synthesis_engine.routers.suites import router as suites_router
from src.synthesis_engine.routers.scenarios import router as scenarios_router

app.include_router(health_router)
app.include_router(suites_router)
app.include_router(scenarios_router)
