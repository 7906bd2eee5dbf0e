"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - ChatHistoryModel: Interaction history rows
  - history_crud: CRUD singleton

Dependencies: sqlalchemy, caritas.configs
System role: Database adapter for interaction history
"""

from caritas.boundary.db.base import Base, TimestampMixin, UUIDMixin
from caritas.boundary.db.connection import get_async_engine, get_async_session_factory
from caritas.boundary.db.models import ChatHistoryModel
from caritas.boundary.db.CRUD import BaseCRUD, HistoryCRUD, history_crud

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_engine",
    "get_async_session_factory",
    "ChatHistoryModel",
    "BaseCRUD",
    "HistoryCRUD",
    "history_crud",
]
