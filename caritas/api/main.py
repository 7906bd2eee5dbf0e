"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, caritas.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from caritas import __version__
from caritas.api.cors import PrefixExemptCORSMiddleware
from caritas.api.deps.dependencies import get_service_cache
from caritas.api.rate_limiter import limiter, rate_limit_exceeded_handler
from caritas.configs import get_settings
from caritas.core.exceptions import ClientPreconditionError
from caritas.observability.logger import configure_logging
from caritas.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    documents_router,
    functions_router,
    health_router,
    history_router,
    status_router,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Validates configuration at startup (missing secrets fail here, not on
    the first request) and releases shared clients at shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Caritas API starting",
        extra={"environment": settings.environment, "version": __version__},
    )

    yield

    # Shutdown
    await get_service_cache().aclose()
    logger.info("Service cache cleared")


async def client_precondition_handler(
    request: Request, exc: ClientPreconditionError
) -> JSONResponse:
    """Map a rejected request to 400 with the user-facing message."""
    logger.info(
        "Request rejected",
        extra={"path": request.url.path, "reason": exc.message, "details": exc.details},
    )
    return JSONResponse(status_code=400, content={"error": exc.message})


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Caritas API",
        description="Function proxy, provider status and document processing",
        version=__version__,
        lifespan=lifespan,
    )

    # The function proxy sets its own fixed CORS headers and answers its own preflights
    app.add_middleware(
        PrefixExemptCORSMiddleware,
        exempt_prefixes=(f"{API_PREFIX}/functions",),
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.state.limiter = limiter
    app.add_exception_handler(ClientPreconditionError, client_precondition_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(functions_router, prefix=API_PREFIX)
    app.include_router(status_router, prefix=API_PREFIX)
    app.include_router(documents_router, prefix=API_PREFIX)
    app.include_router(history_router, prefix=API_PREFIX)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn."""
    uvicorn.run(
        "caritas.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run()
