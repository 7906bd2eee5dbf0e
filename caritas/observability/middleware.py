"""
Request-scoped observability middleware.

CorrelationMiddleware tags every request with an X-Correlation-ID;
RequestLoggingMiddleware writes one line per request and one per outcome.

Dependencies: fastapi, starlette, caritas.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from caritas.observability.correlation import (
    CORRELATION_HEADER,
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        context = {"method": request.method, "path": request.url.path}

        logger.info(
            "Request received",
            extra={**context, "client_host": request.client.host if request.client else None},
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request crashed",
                extra={**context, "duration_ms": _elapsed_ms(started), "error_type": type(e).__name__},
            )
            raise

        logger.info(
            "Request completed",
            extra={**context, "status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Binds a correlation ID to the request context.

    Reuses the caller's X-Correlation-ID when present, otherwise mints one,
    and echoes it on the response.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
