"""
Health check API endpoints.

Routes: GET /health

Dependencies: caritas.configs
System role: Health check HTTP API
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from caritas.api.deps import get_settings_dependency
from caritas.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    timestamp: datetime
    environment: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(
        status="healthy",
        message="Caritas API is running",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
    )
