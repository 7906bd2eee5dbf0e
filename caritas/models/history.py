"""
History domain models and schemas.

Dependencies: pydantic
System role: Interaction history contracts
"""

import enum

from pydantic import BaseModel, ConfigDict, Field

TITLE_MAX_LENGTH = 50
TITLE_TRUNCATED_LENGTH = 47
ELLIPSIS = "..."


class HistoryCategory(str, enum.Enum):
    """Feature area an interaction came from."""

    COURSE_TUTOR = "course-tutor"
    STUDY_PLANNER = "study-planner"
    ASSIGNMENT_HELPER = "assignment-helper"
    RESEARCH = "research"
    DEFAULT = "default"


def derive_title(query: str) -> str:
    """Bound the title to 50 visible characters."""
    if len(query) > TITLE_MAX_LENGTH:
        return f"{query[:TITLE_TRUNCATED_LENGTH]}{ELLIPSIS}"
    return query


def compose_content(query: str, answer: str, metadata: str | None = None) -> str:
    """Interleave query, answer and optional context under labeled sections."""
    content = f"Q: {query}\n\nA: {answer}"
    if metadata:
        content += f"\n\nContext: {metadata}"
    return content


class HistoryEntry(BaseModel):
    """One completed interaction. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    title: str
    content: str
    category: HistoryCategory

    @classmethod
    def from_interaction(
        cls,
        user_id: str,
        query: str,
        answer: str,
        category: HistoryCategory | str,
        metadata: str | None = None,
    ) -> "HistoryEntry":
        return cls(
            user_id=user_id,
            title=derive_title(query),
            content=compose_content(query, answer, metadata),
            category=HistoryCategory(category),
        )


class RecordHistoryRequest(BaseModel):
    """Request schema for POST /history."""

    user_id: str | None = Field(default=None, description="Owner of the interaction")
    query: str = Field(description="Question the user asked")
    answer: str = Field(description="Answer the user received")
    category: HistoryCategory = Field(default=HistoryCategory.DEFAULT)
    metadata: str | None = Field(default=None, description="Free-text context")


class RecordHistoryResponse(BaseModel):
    """Response schema for POST /history."""

    status: str = "accepted"
