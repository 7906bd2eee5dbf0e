"""
Process-wide settings.

Runtime environment name, debug flag and log level. Concern-specific
settings classes live beside this module, each with its own env prefix.

Dependencies: pydantic_settings
System role: Root of the configuration tree
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Unprefixed settings read from the environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment name reported by /health (development, staging, production)",
    )
    debug: bool = Field(default=False, description="Verbose error output")
    log_level: str = Field(
        default="INFO",
        description="Root log level applied at startup",
    )
