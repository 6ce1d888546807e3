"""Persisted display preferences."""

import logging
import sqlite3

from aithena.storage.kv_store import SqliteKeyValueStore

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"


class Preferences:
    """Boolean display flags stored alongside the message log."""

    def __init__(self, backend: SqliteKeyValueStore) -> None:
        self._backend = backend

    @property
    def dark_mode(self) -> bool:
        try:
            value = self._backend.get(DARK_MODE_KEY)
        except sqlite3.Error as e:
            logger.warning(f"Unreadable {DARK_MODE_KEY} preference: {e}")
            return False
        # Anything other than the literal "true" reads as off
        return value == "true"

    def set_dark_mode(self, enabled: bool) -> None:
        self._backend.set(DARK_MODE_KEY, "true" if enabled else "false")

    def toggle_dark_mode(self) -> bool:
        """Flip the dark-mode flag and return the new value."""
        enabled = not self.dark_mode
        self.set_dark_mode(enabled)
        return enabled
