"""API routers."""

from .documents import router as documents_router
from .functions import router as functions_router
from .health import router as health_router
from .history import router as history_router
from .status import router as status_router

__all__ = [
    "documents_router",
    "functions_router",
    "health_router",
    "history_router",
    "status_router",
]
