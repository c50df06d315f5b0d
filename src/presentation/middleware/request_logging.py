"""
Structured JSON request logging middleware.

Every request/response cycle is logged as a single structured event with
method, path, status code, duration and a request id.  The request id is
bound to structlog's context variables so that log lines emitted by the
hashing service during the request carry it too.  Request bodies are never
logged.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from infrastructure.observability.logging_config import get_logger

logger = get_logger("passhash.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every HTTP request/response with structured JSON fields.

    Captured fields:
        - ``request_id``  -- caller-supplied ``X-Request-ID`` or a new UUID
        - ``method``      -- HTTP method
        - ``path``        -- request path
        - ``status_code`` -- response status
        - ``duration_ms`` -- wall-clock duration in milliseconds
        - ``client_ip``   -- client IP address
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            self._log_request(
                request=request,
                request_id=request_id,
                status_code=500,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                level="error",
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id

        level = "info" if response.status_code < 400 else "warning"
        if response.status_code >= 500:
            level = "error"

        self._log_request(
            request=request,
            request_id=request_id,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            level=level,
        )
        return response

    @staticmethod
    def _log_request(
        *,
        request: Request,
        request_id: str,
        status_code: int,
        duration_ms: float,
        level: str = "info",
    ) -> None:
        event_data: dict[str, Any] = {
            "request_id": request_id,
            "method": request.method,
            "path": str(request.url.path),
            "status_code": status_code,
            "duration_ms": duration_ms,
            "client_ip": request.client.host if request.client else None,
        }

        log_method = getattr(logger, level, logger.info)
        log_method("http_request", **event_data)
