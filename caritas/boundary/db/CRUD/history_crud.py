"""
Chat history CRUD operations.

Dependencies: sqlalchemy, caritas.boundary.db.models.history_model
System role: Interaction history persistence operations
"""

from sqlalchemy.ext.asyncio import AsyncSession

from caritas.boundary.db.CRUD.base_crud import BaseCRUD
from caritas.boundary.db.models.history_model import ChatHistoryModel
from caritas.models.history import HistoryEntry


class HistoryCRUD(BaseCRUD[ChatHistoryModel]):
    """CRUD operations for ChatHistoryModel."""

    def __init__(self) -> None:
        """Initialize HistoryCRUD with ChatHistoryModel."""
        super().__init__(ChatHistoryModel)

    async def create_entry(
        self,
        session: AsyncSession,
        entry: HistoryEntry,
    ) -> ChatHistoryModel:
        """
        Insert one history entry.

        Args:
            session: Async database session
            entry: Entry built by the history recorder

        Returns:
            ChatHistoryModel: Stored row
        """
        return await self.create(
            session,
            user_id=entry.user_id,
            title=entry.title,
            content=entry.content,
            category=entry.category,
        )


history_crud = HistoryCRUD()
