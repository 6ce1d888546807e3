"""Durable client state.

Responsibilities:
    - SQLite key-value backing store
    - Subject-partitioned, append-only message log
    - Display preference flags

Writes are synchronous: once a call returns, its effect survives a restart.
"""

from aithena.storage.kv_store import SqliteKeyValueStore
from aithena.storage.message_store import MessageStore, MessageView
from aithena.storage.preferences import Preferences

__all__ = ["MessageStore", "MessageView", "Preferences", "SqliteKeyValueStore"]
