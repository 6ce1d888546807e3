"""Integration tests for restart behavior with a file-backed store."""

from pathlib import Path

import pytest_check as check

from aithena.agent.session_engine import SessionEngine
from aithena.storage.kv_store import SqliteKeyValueStore
from aithena.storage.message_store import MessageStore
from aithena.storage.preferences import Preferences
from tests.conftest import StubGeminiClient, gemini_reply


def _engine(db_path: Path, client: StubGeminiClient) -> tuple[SessionEngine, SqliteKeyValueStore]:
    backend = SqliteKeyValueStore(db_path)
    engine = SessionEngine(
        store=MessageStore(backend),
        client=client,
        preferences=Preferences(backend),
    )
    return engine, backend


class TestRestart:
    """Simulated restarts over the same database file."""

    async def test_conversation_survives_restart(self, tmp_path: Path) -> None:
        """Every subject's history comes back identical and in order."""
        db_path = tmp_path / "aithena.db"
        client = StubGeminiClient(reply=gemini_reply("Paris"))
        engine, backend = _engine(db_path, client)

        engine.select_subject("history")
        await engine.submit("Capital of France?")
        engine.select_subject("math")
        await engine.submit("2+2?")
        engine.toggle_dark_mode()
        before = {s.id: list(engine.messages_for(s.id)) for s in engine.subjects}
        backend.close()

        restarted, backend = _engine(db_path, StubGeminiClient())
        after = {s.id: list(restarted.messages_for(s.id)) for s in restarted.subjects}

        check.equal(after, before)
        check.equal(sum(len(v) for v in after.values()), 6)
        check.is_true(restarted.dark_mode)
        backend.close()

    async def test_no_second_welcome_after_restart(self, tmp_path: Path) -> None:
        db_path = tmp_path / "aithena.db"
        engine, backend = _engine(db_path, StubGeminiClient())
        engine.select_subject("science")
        backend.close()

        restarted, backend = _engine(db_path, StubGeminiClient())
        restarted.select_subject("science")

        check.equal(len(restarted.messages_for("science")), 1)
        backend.close()

    async def test_history_is_replayed_after_restart(self, tmp_path: Path) -> None:
        """A restarted engine sends the rehydrated history to Gemini."""
        db_path = tmp_path / "aithena.db"
        engine, backend = _engine(db_path, StubGeminiClient())
        engine.select_subject("math")
        await engine.submit("What is 2+2?")
        backend.close()

        client = StubGeminiClient()
        restarted, backend = _engine(db_path, client)
        restarted.select_subject("math")
        await restarted.submit("And 3+3?")

        texts = [c["parts"][0]["text"] for c in client.payloads[0]["contents"]]
        check.equal(texts[1:], ["What is 2+2?", "4", "And 3+3?"])
        backend.close()
