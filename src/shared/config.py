"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from src.shared.constants import MAX_SCHEMA_DEPTH


class SharedConfig(BaseSettings):
    """Base configuration shared across all services."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class SynthesisEngineConfig(SharedConfig):
    """Configuration for the Synthesis Engine service."""
    max_schema_depth: int = Field(
        default=MAX_SCHEMA_DEPTH, ge=1, validation_alias="MAX_SCHEMA_DEPTH"
    )
    random_seed: int | None = Field(
        default=None, validation_alias="SYNTHESIS_RANDOM_SEED"
    )
    include_optional_fields: bool = Field(
        default=True, validation_alias="INCLUDE_OPTIONAL_FIELDS"
    )
    default_language: str = Field(
        default="python", validation_alias="DEFAULT_LANGUAGE"
    )
    default_framework: str = Field(
        default="pytest", validation_alias="DEFAULT_FRAMEWORK"
    )
