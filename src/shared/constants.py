"""Shared constants used across the synthesis engine."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"

# Port the service listens on inside its container
INTERNAL_PORT: int = 8000

# Service names
SYNTHESIS_ENGINE_SERVICE_NAME: str = "synthesis-engine"

# Supported render targets: language -> frameworks
SUPPORTED_FRAMEWORKS: dict[str, list[str]] = {
    "javascript": ["jest", "mocha", "jasmine"],
    "java": ["junit5"],
    "csharp": ["nunit", "xunit", "mstest"],
    "python": ["pytest"],
    "go": ["testing"],
}
SUPPORTED_LANGUAGES: list[str] = list(SUPPORTED_FRAMEWORKS)

# Schema walking
MAX_SCHEMA_DEPTH: int = 10

# Error scenarios that survive filtering even when the operation does not
# declare the status code.
BASELINE_ERROR_STATUSES: frozenset[int] = frozenset({400, 401, 403, 404, 500})

# Case-insensitive substrings that mark an operation as authenticated.
AUTH_INDICATORS: tuple[str, ...] = (
    "security",
    "authorization",
    "auth",
    "protected",
    "private",
    "user",
    "profile",
    "account",
)

# Methods for which a templated path implies a lookup of an existing resource.
RESOURCE_LOOKUP_METHODS: frozenset[str] = frozenset({"GET", "PUT", "DELETE"})

JSON_CONTENT_TYPE: str = "application/json"
