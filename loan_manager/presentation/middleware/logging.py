"""Access logging with request timing."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)

QUIET_PATHS = frozenset({"/health", "/metrics"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion and duration; probes are logged at debug."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        path = request.url.path
        log = logger.bind(method=request.method, path=path)
        emit = log.debug if path in QUIET_PATHS else log.info

        emit("request_started", client=request.client.host if request.client else None)

        try:
            response = await call_next(request)
        except Exception as e:
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
