"""
History recorder.

Best-effort persistence of completed interactions. Routes schedule
``record`` as a background task after the response is sent, so recording
never adds latency to, or changes the outcome of, the interaction itself.

Dependencies: sqlalchemy, caritas.boundary.db
System role: Fire-and-forget interaction history
"""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from caritas.boundary.db.CRUD.history_crud import history_crud
from caritas.core.exceptions import PersistenceError
from caritas.models.history import HistoryCategory, HistoryEntry
from caritas.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Writes HistoryEntry rows, each in its own session."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize recorder.

        Args:
            session_factory: Factory for short-lived async sessions
        """
        self.session_factory = session_factory

    async def _persist(self, entry: HistoryEntry) -> None:
        try:
            async with self.session_factory() as db:
                await history_crud.create_entry(db, entry)
                await db.commit()
        except Exception as e:
            raise PersistenceError(
                "Failed to save history entry",
                details={"user_id": entry.user_id, "category": entry.category.value},
            ) from e

    async def record(
        self,
        owner_id: str | None,
        query: str,
        answer: str,
        category: HistoryCategory | str = HistoryCategory.DEFAULT,
        metadata: str | None = None,
    ) -> None:
        """
        Record one interaction. Never raises.

        Args:
            owner_id: User identity; no-op when absent
            query: Question the user asked
            answer: Answer the user received
            category: Feature area of the interaction
            metadata: Optional free-text context
        """
        if not owner_id:
            return

        try:
            entry = HistoryEntry.from_interaction(owner_id, query, answer, category, metadata)
            await self._persist(entry)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Error saving to history",
                e,
                user_id=owner_id,
                category=category,
            )
            return

        logger.debug("History entry saved", extra={"user_id": owner_id})
