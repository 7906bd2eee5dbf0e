"""
Chat history ORM model.

One row per completed interaction, owned by a user identity.

Dependencies: sqlalchemy, caritas.boundary.db.base
System role: Interaction history persistence
"""

from sqlalchemy import Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from caritas.boundary.db.base import Base, UUIDMixin, TimestampMixin
from caritas.models.history import HistoryCategory


class ChatHistoryModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat history ORM model.

    Rows are insert-only from this service; deletion is handled elsewhere.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner identity (indexed for per-user listing)
        title: Query truncated to 50 visible characters
        content: Labeled query/answer/context blob
        category: Feature area the interaction came from
        created_at: Insert timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "chat_history"

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    category: Mapped[HistoryCategory] = mapped_column(
        Enum(
            HistoryCategory,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=HistoryCategory.DEFAULT,
    )
