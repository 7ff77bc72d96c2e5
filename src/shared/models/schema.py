"""Resolved-schema Pydantic v2 data models.

A :class:`ResolvedSchema` is one JSON Schema node after normalisation, paired
with the positional context the engine needs (field path, depth, whether the
parent requires it, and inferred domain hints).
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class DomainType(str, Enum):
    """Semantic categories inferred for a field."""
    FINANCIAL = "financial"
    TEMPORAL = "temporal"
    PERSONAL = "personal"
    GEOGRAPHIC = "geographic"
    TECHNICAL = "technical"
    BUSINESS = "business"


class VariationMode(str, Enum):
    """Which class of example value to synthesize."""
    VALID = "valid"
    INVALID = "invalid"
    EDGE = "edge"
    BOUNDARY = "boundary"


class DomainHint(BaseModel):
    """Inferred semantic category of a field."""
    type: DomainType
    specific_type: str | None = Field(default=None, alias="specificType")
    confidence: float = Field(default=0.6, ge=0.0, le=1.0)

    model_config = {"frozen": True, "populate_by_name": True}


class SchemaConstraints(BaseModel):
    """Type-level JSON Schema keywords copied from a schema node."""
    type: str | None = None
    format: str | None = None
    pattern: str | None = None
    enum: list[Any] | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    minimum: float | int | None = None
    maximum: float | int | None = None
    exclusive_minimum: bool | float | int | None = Field(
        default=None, alias="exclusiveMinimum"
    )
    exclusive_maximum: bool | float | int | None = Field(
        default=None, alias="exclusiveMaximum"
    )
    multiple_of: float | int | None = Field(default=None, alias="multipleOf")
    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")
    unique_items: bool | None = Field(default=None, alias="uniqueItems")
    items: Any = None
    properties: dict[str, Any] | None = None
    required: list[str] = Field(default_factory=list)
    example: Any = None
    nullable: bool | None = None
    description: str | None = None
    read_only: bool | None = Field(default=None, alias="readOnly")
    write_only: bool | None = Field(default=None, alias="writeOnly")
    deprecated: bool | None = None

    model_config = {"frozen": True, "populate_by_name": True}


class SchemaContext(BaseModel):
    """Where a schema node sits relative to the root being resolved."""
    field_path: tuple[str, ...] = ()
    depth: int = Field(default=0, ge=0)
    is_required: bool = False
    domain_hints: tuple[DomainHint, ...] = ()
    parent_type: str | None = None
    # id() of every raw schema node from the root down to this one
    lineage: tuple[int, ...] = ()
    # The raw node already appears higher up the path (self-referential schema)
    recursive: bool = False

    model_config = {"frozen": True}

    @property
    def field_name(self) -> str:
        """Last key of the field path, ``"field"`` at an anonymous root."""
        return self.field_path[-1] if self.field_path else "field"

    @property
    def primary_hint(self) -> DomainHint | None:
        """The authoritative (first) hint, if any."""
        return self.domain_hints[0] if self.domain_hints else None


class ResolvedSchema(BaseModel):
    """A schema node plus its positional context."""
    constraints: SchemaConstraints
    context: SchemaContext

    model_config = {"frozen": True}

    @property
    def type(self) -> str | None:
        return self.constraints.type

    @property
    def field_name(self) -> str:
        return self.context.field_name
