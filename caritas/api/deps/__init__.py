"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_document_orchestrator,
    get_function_gateway,
    get_history_recorder,
    get_service_cache,
    get_settings_dependency,
    get_status_aggregator,
)

__all__ = [
    "get_document_orchestrator",
    "get_function_gateway",
    "get_history_recorder",
    "get_service_cache",
    "get_settings_dependency",
    "get_status_aggregator",
]
