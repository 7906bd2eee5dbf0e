"""
Provider health/quota probes.

One probe per external AI provider. Each probe knows its endpoint, how to
authenticate, how to read the provider-specific response, and the static
fallback template used when the provider cannot be queried.

Dependencies: httpx, pydantic
System role: Outbound status queries for the provider status aggregator
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import SecretStr

from caritas.configs.providers import ProviderSettings

NOT_CONFIGURED_ERROR = "API key not configured"


class ProviderProbeError(Exception):
    """Raised when a provider answers with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"API Error: {status_code}")


def _as_text(value: Any) -> str | None:
    """Render a provider-specific quota value as display text."""
    if value is None:
        return None
    if isinstance(value, dict):
        if "requests" in value and "interval" in value:
            return f"{value['requests']} requests/{value['interval']}"
        return ", ".join(f"{k}={v}" for k, v in value.items())
    return str(value)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class ProviderProbe(ABC):
    """Base class for provider probes."""

    name: str = ""
    reports_status: bool = False

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: SecretStr | None,
        timeout: float,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._api_key.get_secret_value())

    @property
    def key(self) -> str:
        return self._api_key.get_secret_value() if self._api_key else ""

    def fallback_template(self) -> dict[str, Any]:
        """Every field the provider reports, in its not-configured state."""
        template: dict[str, Any] = {"available": False, "error": NOT_CONFIGURED_ERROR}
        if self.reports_status:
            template["status"] = "Not Configured"
        return template

    def failure(self, error: str) -> dict[str, Any]:
        """Fields describing a failed probe."""
        fields: dict[str, Any] = {"available": False, "error": error}
        if self.reports_status:
            fields["status"] = "Error"
        return fields

    def _check(self, response: httpx.Response) -> httpx.Response:
        if not response.is_success:
            raise ProviderProbeError(response.status_code)
        return response

    @abstractmethod
    async def probe(self) -> dict[str, Any]:
        """
        Query the provider once.

        Returns:
            dict: Live fields to merge over the fallback template

        Raises:
            ProviderProbeError: Non-2xx response
            httpx.HTTPError: Transport failure or timeout
            ValueError: Malformed response body
        """


class GoogleAIProbe(ProviderProbe):
    """Google AI Studio: model listing doubles as a key check."""

    name = "googleAI"
    reports_status = True

    def __init__(self, http_client: httpx.AsyncClient, settings: ProviderSettings) -> None:
        super().__init__(http_client, settings.google_ai_key, settings.probe_timeout_seconds)
        self._url = settings.google_ai_url

    async def probe(self) -> dict[str, Any]:
        self._check(
            await self._http.get(self._url, params={"key": self.key}, timeout=self._timeout)
        )
        return {
            "available": True,
            "status": "Active",
            "daily_limit": "~6000 requests/day",
            "error": None,
        }


class OpenRouterProbe(ProviderProbe):
    """OpenRouter: key endpoint reports credits and rate limits."""

    name = "openRouter"

    def __init__(self, http_client: httpx.AsyncClient, settings: ProviderSettings) -> None:
        super().__init__(http_client, settings.openrouter_key, settings.probe_timeout_seconds)
        self._url = settings.openrouter_url
        self._referer = settings.openrouter_referer
        self._title = settings.openrouter_title

    async def probe(self) -> dict[str, Any]:
        response = self._check(
            await self._http.get(
                self._url,
                headers={
                    "Authorization": f"Bearer {self.key}",
                    "HTTP-Referer": self._referer,
                    "X-Title": self._title,
                },
                timeout=self._timeout,
            )
        )
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Unexpected OpenRouter response shape")
        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise ValueError("Unexpected OpenRouter response shape")

        return {
            "available": True,
            "credits_remaining": _as_number(data.get("credits_remaining")),
            "credits_granted": _as_number(data.get("credits_granted")),
            "rate_limit_remaining": _as_text(data.get("rate_limit_remaining")),
            "rate_limit": _as_text(data.get("rate_limit")),
            "error": None,
        }


class SerperProbe(ProviderProbe):
    """Serper: a one-result search is the cheapest liveness check."""

    name = "serperAI"
    reports_status = True

    def __init__(self, http_client: httpx.AsyncClient, settings: ProviderSettings) -> None:
        super().__init__(http_client, settings.serper_key, settings.probe_timeout_seconds)
        self._url = settings.serper_url

    async def probe(self) -> dict[str, Any]:
        self._check(
            await self._http.post(
                self._url,
                headers={"X-API-KEY": self.key, "Content-Type": "application/json"},
                json={"q": "test", "num": 1},
                timeout=self._timeout,
            )
        )
        return {
            "available": True,
            "status": "Active",
            "monthly_limit": "2,500 requests/month",
            "error": None,
        }


def build_default_probes(
    http_client: httpx.AsyncClient,
    settings: ProviderSettings,
) -> list[ProviderProbe]:
    """Probes for every provider the status panel shows, in display order."""
    return [
        GoogleAIProbe(http_client, settings),
        OpenRouterProbe(http_client, settings),
        SerperProbe(http_client, settings),
    ]
