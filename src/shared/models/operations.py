"""Parsed API description models consumed by the synthesis engine.

These mirror the output of the (external) spec ingestion step: one
:class:`ParsedOperation` per ``path`` x ``method`` with ``$ref`` pointers
already dereferenced.
"""
from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.shared.constants import JSON_CONTENT_TYPE

_PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")


class ParsedOperation(BaseModel):
    """A single API operation (``METHOD /path``)."""
    method: str
    path: str
    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    parameters: list[dict[str, Any]] | None = None
    request_body: dict[str, Any] | None = Field(default=None, alias="requestBody")
    responses: dict[str, Any] = Field(default_factory=dict)
    security: list[dict[str, Any]] | None = None

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("method")
    @classmethod
    def upper_method(cls, value: str) -> str:
        return value.upper()

    @field_validator("responses", mode="before")
    @classmethod
    def stringify_status_keys(cls, value: Any) -> Any:
        # YAML loaders hand back integer status codes
        if isinstance(value, dict):
            return {str(key): val for key, val in value.items()}
        return value

    @property
    def key(self) -> str:
        """``"GET /users/{id}"``"""
        return f"{self.method} {self.path}"

    @property
    def primary_tag(self) -> str:
        return self.tags[0] if self.tags else "default"

    def json_request_schema(self) -> dict[str, Any] | None:
        """Return the ``application/json`` request body schema, if declared."""
        if not isinstance(self.request_body, dict):
            return None
        media = (self.request_body.get("content") or {}).get(JSON_CONTENT_TYPE)
        if not isinstance(media, dict):
            return None
        schema = media.get("schema")
        return schema if isinstance(schema, dict) else None

    def response_schema(self, status: int | str) -> dict[str, Any] | None:
        """Return the ``application/json`` schema declared for *status*."""
        response = self.responses.get(str(status))
        if not isinstance(response, dict):
            return None
        media = (response.get("content") or {}).get(JSON_CONTENT_TYPE)
        if not isinstance(media, dict):
            return None
        schema = media.get("schema")
        return schema if isinstance(schema, dict) else None

    def success_status(self) -> int:
        """First declared 2xx status, or 200."""
        for status in self.responses:
            if status.isdigit() and 200 <= int(status) < 300:
                return int(status)
        return 200

    def path_parameters(self) -> list[str]:
        """Names of brace-delimited path parameters in declaration order."""
        return _PATH_PARAM_RE.findall(self.path)


class SpecInfo(BaseModel):
    """``info`` block of the API description."""
    title: str
    version: str = "1.0.0"


class ParsedSpec(BaseModel):
    """An ingested API description."""
    info: SpecInfo
    operations: list[ParsedOperation] = Field(default_factory=list)
    servers: list[dict[str, Any]] | None = None

    model_config = {"frozen": True}
