"""ORM models."""

from caritas.boundary.db.models.history_model import ChatHistoryModel

__all__ = ["ChatHistoryModel"]
