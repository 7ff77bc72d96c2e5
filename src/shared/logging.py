"""Structured JSON logging with trace_id and operation support."""
from __future__ import annotations

import contextvars
import json
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Context variable for trace_id
trace_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "trace_id", default=""
)

# "METHOD /path" of the operation currently being synthesized
operation_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "operation", default=""
)


class JSONFormatter(logging.Formatter):
    """Custom JSON log formatter."""

    def __init__(self, service_name: str = "unknown") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": self.service_name,
            "logger": record.name,
            "trace_id": trace_id_var.get(""),
            "message": record.getMessage(),
        }
        operation = operation_var.get("")
        if operation:
            log_entry["operation"] = operation
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


def setup_logging(service_name: str, level: str = "INFO") -> logging.Logger:
    """Configure structured JSON logging for a service.

    The handler is attached to the ``src`` package logger as well, so module
    loggers created with ``logging.getLogger(__name__)`` emit JSON too.

    Args:
        service_name: Name of the service for log entries.
        level: Log level string (e.g. "INFO", "DEBUG").

    Returns:
        Configured logger instance.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter(service_name=service_name))

    for name in (service_name, "src"):
        target = logging.getLogger(name)
        target.setLevel(log_level)
        # Remove existing handlers
        target.handlers.clear()
        target.addHandler(handler)

    return logging.getLogger(service_name)


@contextmanager
def operation_scope(operation_key: str) -> Iterator[None]:
    """Tag every log line emitted inside the block with *operation_key*."""
    token = operation_var.set(operation_key)
    try:
        yield
    finally:
        operation_var.reset(token)


class TraceIDMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware that sets a unique trace_id per request."""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        request_trace_id = str(uuid.uuid4())
        trace_id_var.set(request_trace_id)
        response = await call_next(request)
        response.headers["X-Trace-ID"] = request_trace_id
        return response
