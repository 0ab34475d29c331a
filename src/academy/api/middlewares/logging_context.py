"""Per-request log context and access log line."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.academy.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger("academy.access")

_QUIET_PATHS = frozenset({"/health", "/health/live", "/metrics"})


async def request_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id/method/path for the request and log its outcome."""
    clear_request_context()
    bind_request_context(correlation_id.get(), request.method, request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        if request.url.path not in _QUIET_PATHS:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        return response
    finally:
        clear_request_context()
