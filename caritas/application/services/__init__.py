"""
Application services.

Orchestration layer between the HTTP API and the boundary adapters.
"""

from caritas.application.services.document_processing_service import (
    DocumentProcessingOrchestrator,
    DocumentStorage,
)
from caritas.application.services.gateway_service import CORS_HEADERS, FunctionGateway
from caritas.application.services.history_service import HistoryRecorder
from caritas.application.services.provider_status_service import ProviderStatusAggregator

__all__ = [
    "CORS_HEADERS",
    "DocumentProcessingOrchestrator",
    "DocumentStorage",
    "FunctionGateway",
    "HistoryRecorder",
    "ProviderStatusAggregator",
]
