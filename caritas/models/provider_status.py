"""
Provider status models.

Normalized health/quota schema shared by all AI providers. Serialized in
camelCase with one top-level key per provider next to ``timestamp`` and
``responseTime``, the shape the browser status panel reads
(``data.openRouter.creditsRemaining``).

Dependencies: pydantic
System role: Provider status API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel


class ProviderStatus(BaseModel):
    """Availability and quota snapshot for one provider."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    available: bool
    status: str | None = None
    credits_remaining: float | None = None
    credits_granted: float | None = None
    rate_limit_remaining: str | None = None
    rate_limit: str | None = None
    daily_limit: str | None = None
    monthly_limit: str | None = None
    error: str | None = None


class AggregatedStatus(BaseModel):
    """Status of every configured provider, one entry each."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: datetime
    response_time_ms: int = Field(ge=0)
    providers: dict[str, ProviderStatus] = Field(exclude=True)

    @model_serializer(mode="wrap")
    def _flatten_providers(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        data["responseTime"] = f"{self.response_time_ms}ms"
        for name, status in self.providers.items():
            data[name] = status.model_dump(by_alias=True)
        return data

    def __getitem__(self, provider: str) -> ProviderStatus:
        return self.providers[provider]

    def __contains__(self, provider: object) -> bool:
        return provider in self.providers
