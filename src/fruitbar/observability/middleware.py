"""
fruitbar.observability.middleware

Per-request logging context.

Responsibilities:
- Reuse the caller's `x-request-id` or mint one, and echo it on the response.
- Bind request id, method and path for every log line of the request.
- Emit one `request.completed` event; 5xx responses log at error level.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from fruitbar.observability.logging import get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            emit = log.error if response.status_code >= 500 else log.info
            emit(
                "request.completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        finally:
            # principal/user ids must not leak into the next request on this task
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
