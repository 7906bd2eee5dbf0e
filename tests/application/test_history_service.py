"""
Test suite for HistoryRecorder.

System role: Verification of best-effort history persistence
"""

import logging
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from caritas.application.services.history_service import HistoryRecorder
from caritas.boundary.db.models.history_model import ChatHistoryModel
from caritas.models.history import HistoryCategory


@pytest.mark.asyncio
async def test_record_persists_entry(session_factory) -> None:
    recorder = HistoryRecorder(session_factory)

    await recorder.record(
        "user-1",
        "x" * 80,
        "the answer",
        HistoryCategory.COURSE_TUTOR,
        metadata="Processed 1 document(s): a.pdf",
    )

    async with session_factory() as db:
        rows = (await db.execute(select(ChatHistoryModel))).scalars().all()

    assert len(rows) == 1
    assert rows[0].title == "x" * 47 + "..."
    assert rows[0].content.endswith("\n\nContext: Processed 1 document(s): a.pdf")
    assert rows[0].category is HistoryCategory.COURSE_TUTOR


@pytest.mark.asyncio
async def test_record_without_owner_is_noop() -> None:
    session_factory = MagicMock()

    await HistoryRecorder(session_factory).record(None, "q", "a")

    session_factory.assert_not_called()


@pytest.mark.asyncio
async def test_persistence_failure_is_swallowed_and_logged(caplog) -> None:
    session_factory = MagicMock(side_effect=ConnectionError("db down"))

    with caplog.at_level(logging.ERROR):
        await HistoryRecorder(session_factory).record("user-1", "q", "a")

    assert "Error saving to history" in caplog.text


@pytest.mark.asyncio
async def test_invalid_category_is_swallowed(session_factory, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        await HistoryRecorder(session_factory).record("user-1", "q", "a", category="gossip")

    assert "Error saving to history" in caplog.text
    async with session_factory() as db:
        assert (await db.execute(select(ChatHistoryModel))).scalars().all() == []
