"""
Upstream function host configuration.

Settings for the remote function host that the gateway and the document
orchestrator call into. Base URL and anonymous key have no defaults: a
deployment without them fails at startup instead of talking to a stale host.

Dependencies: pydantic_settings
System role: Upstream function host configuration
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UpstreamSettings(BaseSettings):
    """Settings for calls to the upstream function host."""

    model_config = SettingsConfigDict(
        env_prefix="UPSTREAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        description="Base URL of the upstream function host (no trailing /functions/v1)",
    )
    anon_key: SecretStr = Field(
        description="Anonymous API key sent as the 'apikey' header",
    )
    client_info: str = Field(
        default="caritas-proxy",
        description="Value of the X-Client-Info header on outbound calls",
    )
    process_function: str = Field(
        default="process-document",
        description="Remote function invoked once per uploaded document",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Per-call timeout for upstream requests",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize base URL so joining never produces a double slash."""
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("UPSTREAM_BASE_URL must not be empty")
        return value

    @property
    def functions_url(self) -> str:
        """Root URL under which named functions are exposed."""
        return f"{self.base_url}/functions/v1"
