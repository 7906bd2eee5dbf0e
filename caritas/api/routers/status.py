"""
Provider status API endpoints.

Routes: GET /status

Dependencies: slowapi, caritas.application.services.provider_status_service
System role: Provider health/quota HTTP API
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from caritas.api.deps import get_settings_dependency, get_status_aggregator
from caritas.api.rate_limiter import limiter, status_rate_limit
from caritas.application.services import ProviderStatusAggregator
from caritas.configs import Settings

router = APIRouter(prefix="/status", tags=["status"])


@router.get("")
@limiter.limit(status_rate_limit)
async def get_provider_status(
    request: Request,
    aggregator: ProviderStatusAggregator = Depends(get_status_aggregator),
    settings: Settings = Depends(get_settings_dependency),
) -> JSONResponse:
    """
    Report availability and quota of every AI provider.

    Always 200 within the rate limit: provider failures are reported inside
    the payload. Returned as a ready JSONResponse since the wire shape puts
    providers at the top level, next to ``timestamp`` and ``responseTime``.

    Args:
        request: Inbound request (rate limit key)
        aggregator: Injected ProviderStatusAggregator
        settings: Application settings

    Returns:
        JSONResponse: camelCase status keyed by provider name
    """
    status = await aggregator.get_status()
    return JSONResponse(
        content=status.model_dump(mode="json", by_alias=True),
        headers={"Cache-Control": f"max-age={settings.providers.status_max_age_seconds}"},
    )
