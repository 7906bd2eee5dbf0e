"""
API test fixtures.

Provides: FastAPI app with dependency overrides and a TestClient
Dependencies: fastapi
System role: HTTP-level test infrastructure
"""

import pytest
from fastapi.testclient import TestClient

from caritas.api.main import create_app
from caritas.api.rate_limiter import limiter


class RecordingRecorder:
    """Stand-in for HistoryRecorder that keeps every call."""

    def __init__(self) -> None:
        self.calls = []

    async def record(self, owner_id, query, answer, category="default", metadata=None) -> None:
        self.calls.append(
            {
                "owner_id": owner_id,
                "query": query,
                "answer": answer,
                "category": category,
                "metadata": metadata,
            }
        )


@pytest.fixture
def app():
    limiter.reset()
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def recorder() -> RecordingRecorder:
    return RecordingRecorder()
