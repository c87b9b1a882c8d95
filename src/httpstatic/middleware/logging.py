"""
=============================================================================
ACCESS LOGGING MIDDLEWARE
=============================================================================

One log line per request, emitted on the ``httpstatic.access`` logger:

    127.0.0.1 - - [19/Oct/2026:10:00:00 +0000] "GET /public/app.js" 206 500 0.41ms

or, with ``log_format="json"``, one JSON object per line for log shippers.

Place it FIRST in the pipeline so that it times and records everything,
including requests the static stage rejects or passes along:

    pipeline.add(LoggingMiddleware())
    pipeline.add(StaticMiddleware(config))

=============================================================================
"""

import time
import json
import uuid
import logging
from typing import Optional
from dataclasses import dataclass, asdict

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


# Configure separately from the application loggers:
#   logging.getLogger("httpstatic.access").setLevel(logging.WARNING)
logger = logging.getLogger("httpstatic.access")


@dataclass
class RequestLog:
    """Structured log entry for a request."""

    request_id: str
    method: str
    path: str
    query: str
    client_ip: str
    user_agent: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        entry = asdict(self)
        entry["duration_ms"] = round(self.duration_ms, 2)
        return entry

    def to_text(self) -> str:
        """Apache combined-style line."""
        target = f"{self.path}?{self.query}" if self.query else self.path
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {target}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class LoggingMiddleware(Middleware):
    """
    Request logging middleware.

    Args:
        log_format: ``"text"`` or ``"json"``.
        include_request_id: Add an ``x-request-id`` header to the response.
        log_level: Level used for access lines.
        skip_paths: Request paths that are never logged.
    """

    def __init__(
        self,
        log_format: str = "text",
        include_request_id: bool = True,
        log_level: int = logging.INFO,
        skip_paths: Optional[list[str]] = None,
    ):
        if log_format not in ("text", "json"):
            raise ValueError(f"log_format must be 'text' or 'json', got {log_format!r}")
        self.log_format = log_format
        self.include_request_id = include_request_id
        self.log_level = log_level
        self.skip_paths = set(skip_paths or [])

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        request_id = uuid.uuid4().hex[:8]
        start_time = time.perf_counter()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.path} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000

        if self.include_request_id:
            response.headers["x-request-id"] = request_id

        if request.path in self.skip_paths:
            return response

        log_entry = RequestLog(
            request_id=request_id,
            method=request.method,
            path=request.path,
            query=request.query_string,
            client_ip=request.client_address[0],
            user_agent=request.user_agent or "-",
            status_code=int(response.status),
            content_length=response.content_length,
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(self.log_level, log_entry.to_text())

        return response
