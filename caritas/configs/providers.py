"""
AI provider status configuration.

Credentials and endpoints for the provider health/quota probes. Keys are
optional: a provider without a key is reported as not configured.

Dependencies: pydantic_settings
System role: Provider status probe configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    """Settings for provider status probes."""

    model_config = SettingsConfigDict(
        env_prefix="PROVIDERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    google_ai_key: SecretStr | None = Field(
        default=None,
        description="Google AI Studio API key",
    )
    openrouter_key: SecretStr | None = Field(
        default=None,
        description="OpenRouter API key",
    )
    serper_key: SecretStr | None = Field(
        default=None,
        description="Serper search API key",
    )

    google_ai_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Google AI model listing endpoint used as a liveness probe",
    )
    openrouter_url: str = Field(
        default="https://openrouter.ai/api/v1/auth/key",
        description="OpenRouter key/quota endpoint",
    )
    serper_url: str = Field(
        default="https://google.serper.dev/search",
        description="Serper search endpoint used as a liveness probe",
    )

    openrouter_referer: str = Field(
        default="https://caritas.app",
        description="HTTP-Referer sent to OpenRouter",
    )
    openrouter_title: str = Field(
        default="Caritas",
        description="X-Title sent to OpenRouter",
    )

    probe_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for each provider probe",
    )
    status_max_age_seconds: int = Field(
        default=300,
        description="Client-side staleness window advertised on the status response",
    )
    status_rate_limit: str = Field(
        default="100/hour",
        description="Per-client limit on GET /status (slowapi limit string)",
    )
