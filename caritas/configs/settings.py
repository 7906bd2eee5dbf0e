"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field, ValidationError

from caritas.configs.base import BaseSettings
from caritas.configs.database import DatabaseSettings
from caritas.configs.providers import ProviderSettings
from caritas.configs.s3_documents import S3DocumentsSettings
from caritas.configs.upstream import UpstreamSettings
from caritas.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Sub-settings are built on instantiation so required values are
    # validated when Settings() is created, not at import time.
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    s3_documents: S3DocumentsSettings = Field(default_factory=S3DocumentsSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Raises:
        ConfigurationError: If a required setting (URL, key, password) is missing

    Usage:
        from caritas.configs import get_settings
        settings = get_settings()
    """
    try:
        return Settings()
    except ValidationError as e:
        missing = sorted(
            ".".join(str(part) for part in error["loc"]) for error in e.errors()
        )
        raise ConfigurationError(
            "Invalid or missing configuration",
            details={"fields": missing},
        ) from e
