"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - backend: in-memory SQLite key-value store
    - store: message store over the backend
    - stub_client: scriptable stand-in for the Gemini client
    - engine: session engine wired to the fixtures above
    - async_client: HTTPX client for API testing with the engine injected
"""

import asyncio
from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from aithena.agent.errors import NetworkFailure
from aithena.agent.session_engine import SessionEngine, get_session_engine
from aithena.api import app
from aithena.storage.kv_store import SqliteKeyValueStore
from aithena.storage.message_store import MessageStore
from aithena.storage.preferences import Preferences


def gemini_reply(text: str) -> dict[str, Any]:
    """Build a minimal generateContent response carrying text."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class StubGeminiClient:
    """Records payloads and returns a scripted reply or raises a scripted error.

    When gate is set, each call waits on it before answering, which keeps a
    submission in flight until the test releases it.
    """

    def __init__(self, reply: Any = None, error: Exception | None = None) -> None:
        self.reply = reply if reply is not None else gemini_reply("4")
        self.error = error
        self.payloads: list[dict[str, Any]] = []
        self.gate: asyncio.Event | None = None

    async def generate_content(self, payload: dict[str, Any]) -> Any:
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def backend() -> Generator[SqliteKeyValueStore]:
    """Return a fresh in-memory key-value store."""
    kv = SqliteKeyValueStore()
    yield kv
    kv.close()


@pytest.fixture
def store(backend: SqliteKeyValueStore) -> MessageStore:
    return MessageStore(backend)


@pytest.fixture
def stub_client() -> StubGeminiClient:
    return StubGeminiClient()


@pytest.fixture
def failing_client() -> StubGeminiClient:
    return StubGeminiClient(error=NetworkFailure("HTTP 500", status_code=500))


@pytest.fixture
def engine(
    store: MessageStore,
    stub_client: StubGeminiClient,
    backend: SqliteKeyValueStore,
) -> SessionEngine:
    return SessionEngine(store=store, client=stub_client, preferences=Preferences(backend))


@pytest.fixture
async def async_client(engine: SessionEngine) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with the test engine injected.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_session_engine] = lambda: engine
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
