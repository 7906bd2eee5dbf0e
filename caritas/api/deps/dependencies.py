"""
Dependency injection container.

Factory functions for FastAPI dependencies. Shared resources (HTTP client,
S3 client, database engine) are created lazily once per process and
released at shutdown.

Dependencies: caritas.configs, caritas.application, caritas.boundary
System role: DI container for service injection
"""

import httpx

from caritas.application.services import (
    DocumentProcessingOrchestrator,
    FunctionGateway,
    HistoryRecorder,
    ProviderStatusAggregator,
)
from caritas.boundary.aws.s3_client import S3DocumentClient
from caritas.boundary.providers.probes import build_default_probes
from caritas.boundary.upstream.function_client import UpstreamFunctionClient
from caritas.configs import Settings, get_settings
from caritas.core.upload_rules import StorageKeyFactory


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._http_client = None
        self._s3_client = None
        self._db_engine = None
        self._session_factory = None

    @property
    def settings(self) -> Settings:
        return get_settings()

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get cached outbound HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient()
        return self._http_client

    @property
    def s3_client(self) -> S3DocumentClient:
        """Get cached S3 document client."""
        if self._s3_client is None:
            s3 = self.settings.s3_documents
            self._s3_client = S3DocumentClient(bucket=s3.bucket, region=s3.region)
        return self._s3_client

    @property
    def session_factory(self):
        """Get cached async session factory (engine created on first use)."""
        if self._session_factory is None:
            from caritas.boundary.db.connection import (
                get_async_engine,
                get_async_session_factory,
            )

            self._db_engine = get_async_engine(self.settings.database)
            self._session_factory = get_async_session_factory(self._db_engine)
        return self._session_factory

    @property
    def function_client(self) -> UpstreamFunctionClient:
        return UpstreamFunctionClient(self.http_client, self.settings.upstream)

    async def aclose(self) -> None:
        """Close and drop all cached instances."""
        if self._http_client is not None:
            await self._http_client.aclose()
        if self._db_engine is not None:
            await self._db_engine.dispose()
        self._http_client = None
        self._s3_client = None
        self._db_engine = None
        self._session_factory = None


# Global service cache
_service_cache = ServiceCache()

# One key factory per process so keys stay unique across requests
_key_factory = StorageKeyFactory()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_function_gateway() -> FunctionGateway:
    """
    Get function gateway instance.

    Returns:
        FunctionGateway: Gateway bound to the shared HTTP client
    """
    return FunctionGateway(get_service_cache().function_client)


def get_status_aggregator() -> ProviderStatusAggregator:
    """
    Get provider status aggregator instance.

    Returns:
        ProviderStatusAggregator: Aggregator over every configured provider
    """
    cache = get_service_cache()
    return ProviderStatusAggregator(
        build_default_probes(cache.http_client, cache.settings.providers)
    )


def get_document_orchestrator() -> DocumentProcessingOrchestrator:
    """
    Get document processing orchestrator instance.

    Returns:
        DocumentProcessingOrchestrator: Orchestrator using S3 and the upstream host
    """
    cache = get_service_cache()
    settings = cache.settings
    return DocumentProcessingOrchestrator(
        storage=cache.s3_client,
        functions=cache.function_client,
        process_function=settings.upstream.process_function,
        max_total_bytes=settings.s3_documents.max_total_bytes,
        key_factory=_key_factory,
    )


def get_history_recorder() -> HistoryRecorder:
    """
    Get history recorder instance.

    Returns:
        HistoryRecorder: Recorder writing through the shared session factory
    """
    return HistoryRecorder(get_service_cache().session_factory)
