"""
History database configuration.

Connection and pool parameters for the PostgreSQL database that stores
interaction history. The password has no default.

Dependencies: pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL


class DatabaseSettings(BaseSettings):
    """PostgreSQL settings (POSTGRES_* environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="POSTGRES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    user: str = Field(default="postgres", description="Database role")
    password: SecretStr = Field(description="Database password")
    db: str = Field(default="caritas", description="Database name")

    pool_size: int = Field(default=5, description="Persistent pool connections")
    max_overflow: int = Field(default=10, description="Burst connections above pool_size")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a free connection")
    echo_sql: bool = Field(default=False, description="Log emitted SQL")

    sslmode: str = Field(default="require", description="'require' enables TLS, anything else disables it")

    @property
    def async_database_url(self) -> str:
        """asyncpg URL; credentials are escaped, TLS follows sslmode."""
        url = URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.sslmode == "require" else {},
        )
        return url.render_as_string(hide_password=False)
