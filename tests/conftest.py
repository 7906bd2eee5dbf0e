"""
Shared test fixtures and configuration for entire test suite.

Provides: Required environment defaults, settings, HTTP clients, an
in-memory history database and upload blob builders
Dependencies: pytest, httpx, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import os

# Required settings must exist before any caritas module builds Settings
os.environ.setdefault("UPSTREAM_BASE_URL", "https://upstream.test")
os.environ.setdefault("UPSTREAM_ANON_KEY", "test-anon-key")
os.environ.setdefault("POSTGRES_PASSWORD", "test")

import httpx
import pytest
from pydantic import SecretStr

from caritas.boundary.upstream.function_client import UpstreamFunctionClient
from caritas.configs import get_settings
from caritas.configs.providers import ProviderSettings
from caritas.configs.upstream import UpstreamSettings
from caritas.models.documents import UploadBlob

PDF = "application/pdf"
TXT = "text/plain"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def upstream_settings() -> UpstreamSettings:
    """Upstream settings pointing at a fake host."""
    return UpstreamSettings(
        _env_file=None,
        base_url="https://upstream.test/",
        anon_key=SecretStr("test-anon-key"),
        client_info="caritas-test",
        timeout_seconds=2.0,
    )


@pytest.fixture
def provider_settings() -> ProviderSettings:
    """Provider settings with every key configured."""
    return ProviderSettings(
        _env_file=None,
        google_ai_key=SecretStr("google-key"),
        openrouter_key=SecretStr("openrouter-key"),
        serper_key=SecretStr("serper-key"),
    )


@pytest.fixture
async def http_client():
    """Async HTTP client; requests are intercepted by respx in tests."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def function_client(http_client, upstream_settings) -> UpstreamFunctionClient:
    """Upstream function client bound to the fake host."""
    return UpstreamFunctionClient(http_client, upstream_settings)


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Session factory over a fresh chat_history table
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from caritas.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


def make_blob(name: str, content_type: str = PDF, size: int = 16) -> UploadBlob:
    """Build an UploadBlob of ``size`` bytes."""
    return UploadBlob(file_name=name, content_type=content_type, data=b"x" * size)


@pytest.fixture
def blob_factory():
    """Expose make_blob to tests as a fixture."""
    return make_blob
