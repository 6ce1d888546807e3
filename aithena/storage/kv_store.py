"""SQLite-backed key-value store for durable client state.

Holds the serialized message log and display preferences. Every write
is committed before the call returns.
"""

import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

_CORRUPT_CODES = frozenset({sqlite3.SQLITE_CORRUPT, sqlite3.SQLITE_NOTADB})


def _is_corrupt(error: sqlite3.DatabaseError) -> bool:
    # Extended result codes keep the primary code in the low byte
    code = getattr(error, "sqlite_errorcode", None)
    return code is not None and (code & 0xFF) in _CORRUPT_CODES


class SqliteKeyValueStore:
    """String key-value pairs in a single SQLite table.

    Why SQLite over a flat JSON file:
    - Writes are atomic, so a crash mid-write never leaves a truncated log
    - Survives restarts and can be inspected with the sqlite3 shell
    - Zero-config, ships with Python
    """

    def __init__(self, path: str | Path = MEMORY_PATH) -> None:
        """Open (and create if needed) the store.

        A file that SQLite reports as corrupt or not a database is renamed
        to "<path>.corrupt-<epoch>" and replaced by an empty store.

        Args:
            path: Database file path, or ":memory:" for a process-local store.
        """
        self._path = str(path)
        if self._path != MEMORY_PATH:
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self._conn = self._open()
        except sqlite3.DatabaseError as e:
            if self._path == MEMORY_PATH or not _is_corrupt(e):
                raise
            aside = Path(f"{self._path}.corrupt-{int(time.time())}")
            logger.warning(f"Cannot open {self._path} ({e}); moving it to {aside}")
            Path(self._path).replace(aside)
            self._conn = self._open()
        logger.debug(f"Opened key-value store at {self._path}")

    def _open(self) -> sqlite3.Connection:
        # The engine is the only writer; the FastAPI threadpool may open it
        conn = sqlite3.connect(self._path, check_same_thread=False)
        try:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            conn.commit()
        except sqlite3.DatabaseError:
            conn.close()
            raise
        return conn

    @property
    def path(self) -> str:
        return self._path

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for key, or default if the key is absent."""
        row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            return default
        return row[0]

    def set(self, key: str, value: str) -> None:
        """Store value under key and commit."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def close(self) -> None:
        self._conn.close()
