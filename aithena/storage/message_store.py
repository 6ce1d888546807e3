"""Append-only, subject-partitioned message log.

The whole log is rewritten to the backing store on every append, so a
message is durable as soon as append() returns.
"""

import json
import logging
import sqlite3
import time
import uuid
from collections.abc import Iterable, Iterator

from pydantic import TypeAdapter, ValidationError

from aithena.models.schemas import Message, Role
from aithena.models.subjects import SUBJECTS, UnknownSubjectError
from aithena.storage.kv_store import SqliteKeyValueStore

logger = logging.getLogger(__name__)

MESSAGES_KEY = "messages"

_message_list = TypeAdapter(list[Message])


def _now_ms() -> int:
    return int(time.time() * 1000)


class MessageView:
    """Lazy, restartable view of one subject's messages.

    Each iteration re-filters the live log, so repeated iterations give
    identical results until the next append.
    """

    def __init__(self, messages: list[Message], subject: str) -> None:
        self._messages = messages
        self._subject = subject

    @property
    def subject(self) -> str:
        return self._subject

    def __iter__(self) -> Iterator[Message]:
        return (m for m in self._messages if m.subject == self._subject)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"MessageView(subject={self._subject!r}, count={len(self)})"


class MessageStore:
    """Ordered message log persisted under a single key.

    The log only grows: messages are never edited, reordered or removed.
    """

    def __init__(
        self,
        backend: SqliteKeyValueStore,
        subject_ids: Iterable[str] | None = None,
    ) -> None:
        """Rehydrate the log from the backend.

        Args:
            backend: Durable key-value store.
            subject_ids: Known subject ids. Defaults to the built-in catalog.
        """
        self._backend = backend
        if subject_ids is None:
            subject_ids = (s.id for s in SUBJECTS)
        self._subject_ids = frozenset(subject_ids)
        self._messages: list[Message] = self._load()
        self._last_timestamp = max((m.timestamp for m in self._messages), default=0)

    def _load(self) -> list[Message]:
        """Read the persisted log, treating anything unreadable as empty."""
        try:
            raw = self._backend.get(MESSAGES_KEY)
            if raw is None:
                return []
            messages = _message_list.validate_python(json.loads(raw))
        except (ValueError, RecursionError, sqlite3.Error, ValidationError) as e:
            logger.warning(f"Discarding corrupt message log: {e}")
            return []

        known = [m for m in messages if m.subject in self._subject_ids]
        dropped = len(messages) - len(known)
        if dropped:
            logger.warning(f"Dropped {dropped} persisted messages with unknown subjects")

        logger.info(f"Rehydrated {len(known)} messages")
        return known

    def _persist(self) -> None:
        self._backend.set(MESSAGES_KEY, _message_list.dump_json(self._messages).decode("utf-8"))

    def append(self, subject: str, role: Role, content: str) -> Message:
        """Append a new message and persist the full log.

        Args:
            subject: Id of a known subject.
            role: Author of the message.
            content: Message text.

        Returns:
            The stored Message with its assigned id and timestamp.

        Raises:
            UnknownSubjectError: If subject is not in the catalog.
        """
        if subject not in self._subject_ids:
            raise UnknownSubjectError(subject)

        self._last_timestamp = max(_now_ms(), self._last_timestamp)
        message = Message(
            id=str(uuid.uuid4()),
            role=role,
            content=content,
            subject=subject,
            timestamp=self._last_timestamp,
        )
        self._messages.append(message)
        self._persist()
        return message

    def messages_for(self, subject: str) -> MessageView:
        """Return the subject's messages in insertion order."""
        return MessageView(self._messages, subject)

    def has_any(self, subject: str) -> bool:
        """Whether at least one message exists for the subject."""
        return any(m.subject == subject for m in self._messages)

    def __len__(self) -> int:
        return len(self._messages)
