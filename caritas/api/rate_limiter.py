"""
Request rate limiting.

In-memory slowapi limiter keyed on the client address. Behind a proxy the
first X-Forwarded-For hop is the client.

Dependencies: slowapi, caritas.configs
System role: Protects endpoints that fan out to paid provider APIs
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from caritas.configs import get_settings


def get_client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return get_remote_address(request)


def status_rate_limit() -> str:
    """Current limit for GET /status, read from settings on every request."""
    return get_settings().providers.status_rate_limit


limiter = Limiter(key_func=get_client_key)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 with the window the client has to wait out, e.g. ``1 hour``."""
    retry_after = exc.detail.split(" per ", 1)[-1]
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "retryAfter": retry_after},
    )
