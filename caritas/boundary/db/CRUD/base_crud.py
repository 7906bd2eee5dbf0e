"""
Generic insert helper shared by model CRUD classes.

Dependencies: sqlalchemy
System role: Foundation for database CRUD operations
"""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from caritas.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Insert for one mapped model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Add a row and flush it so defaults (id, timestamps) are populated.

        The caller owns the transaction and decides when to commit.

        Args:
            session: Async database session
            **values: Column values for the new row

        Returns:
            ModelT: The flushed, refreshed instance
        """
        row = self.model(**values)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row
