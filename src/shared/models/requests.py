"""Request / response bodies of the synthesis engine HTTP API."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.shared.models.operations import ParsedOperation, ParsedSpec
from src.shared.models.schema import VariationMode
from src.shared.models.test_cases import EnhancedErrorTestSuite


class SuiteRequest(BaseModel):
    """Body of ``POST /api/suites``."""
    spec: ParsedSpec
    language: str | None = None
    framework: str | None = None
    is_provider_mode: bool = False
    seed: int | None = None


class ExampleRequest(BaseModel):
    """Body of ``POST /api/examples``."""
    json_schema: dict[str, Any] = Field(..., alias="schema")
    field_name: str = "field"
    mode: VariationMode = VariationMode.VALID
    include_optional: bool = False
    seed: int | None = None

    model_config = {"populate_by_name": True}


class ExampleResponse(BaseModel):
    """A synthesized example with the matcher compiled for the same schema."""
    mode: VariationMode
    value: Any = None
    matcher: dict[str, Any]


class ScenarioRequest(BaseModel):
    """Body of ``POST /api/scenarios``."""
    operation: ParsedOperation


class ScenarioRenderRequest(BaseModel):
    """Body of ``POST /api/scenarios/render``."""
    operation: ParsedOperation
    is_consumer: bool = True


class RenderedScenarios(BaseModel):
    """pytest source for every error scenario of one operation."""
    operation: str
    is_consumer: bool
    tests: list[str] = Field(default_factory=list)


class ScenarioResponse(BaseModel):
    """Error scenarios plus the boundary / edge envelope for one operation."""
    operation: str
    requires_auth: bool
    suite: EnhancedErrorTestSuite
