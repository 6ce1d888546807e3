"""Conversation session engine.

Core module for the assistant: owns the active subject, the single
in-flight submission slot and the message log, and turns each user
submission into exactly one Gemini request.

Submission lifecycle:

1. **Guard** - empty input, no active subject or a submission already in
   flight make submit() a no-op. The in-flight flag is set before the first
   await and cleared in a finally block after the last one.

2. **User message first** - the user's text is appended (and persisted)
   before any network activity, so the log reflects what was asked even if
   the request never completes.

3. **Failure containment** - anything that goes wrong after the user
   message is stored is logged and replaced by a single apology message.
   Nothing escapes to the caller and nothing is retried.
"""

import enum
import logging

from aithena.agent.config import AssistantConfig, get_assistant_config
from aithena.agent.gemini_client import GeminiClient, GenerativeClient
from aithena.agent.request_builder import build_request
from aithena.agent.response_interpreter import interpret_response
from aithena.models.gemini import GenerationConfig
from aithena.models.schemas import Message, Role, SessionState
from aithena.models.subjects import SUBJECTS, Subject, get_subject
from aithena.parsing.attachment_codec import (
    AttachmentSource,
    EncodedAttachment,
    read_and_encode,
    validate_attachment,
)
from aithena.storage.kv_store import SqliteKeyValueStore
from aithena.storage.message_store import MessageStore, MessageView
from aithena.storage.preferences import Preferences

logger = logging.getLogger(__name__)

APOLOGY_TEXT = "I apologize, but I encountered an error. Please try again."


def welcome_text(subject: Subject) -> str:
    """Greeting synthesized as a subject's first message."""
    topic = subject.name.lower()
    return (
        f"👋 Welcome! I'm your {subject.name} assistant. I'm here to help you learn and "
        f"understand {topic} concepts. Feel free to ask any questions about {topic}, "
        "and I'll do my best to explain them clearly.\n\n"
        "What would you like to learn about today?"
    )


def attachment_marker(filename: str) -> str:
    return f"📎 {filename}"


class SubmitOutcome(enum.Enum):
    """What submit() did with a call."""

    ACCEPTED = "accepted"
    EMPTY = "empty"
    NO_SUBJECT = "no_subject"
    BUSY = "busy"

    def __bool__(self) -> bool:
        return self is SubmitOutcome.ACCEPTED


class SessionEngine:
    """Subject-scoped chat session over the Gemini API.

    One instance per running client. All methods run on the event loop
    thread; the only suspension points are the attachment read and the
    network call inside submit().
    """

    def __init__(
        self,
        store: MessageStore,
        client: GenerativeClient,
        preferences: Preferences | None = None,
        subjects: tuple[Subject, ...] = SUBJECTS,
        generation: GenerationConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            store: Rehydrated message log.
            client: Network collaborator for generateContent calls.
            preferences: Persisted display preferences.
            subjects: Subject catalog.
            generation: Sampling parameters sent with every request.
        """
        self._store = store
        self._client = client
        self._preferences = preferences
        self._subjects = subjects
        self._generation = generation or GenerationConfig()
        self._selected: Subject | None = None
        self._submitting_subject: str | None = None
        self._errors: dict[str, str] = {}

    @property
    def subjects(self) -> tuple[Subject, ...]:
        return self._subjects

    @property
    def selected_subject(self) -> Subject | None:
        return self._selected

    @property
    def is_submitting(self) -> bool:
        return self._submitting_subject is not None

    @property
    def store(self) -> MessageStore:
        return self._store

    def select_subject(self, subject_id: str | None) -> Subject | None:
        """Activate a subject, greeting it on first use.

        Args:
            subject_id: Subject to activate, or None to deselect.

        Returns:
            The active subject, or None.

        Raises:
            UnknownSubjectError: If subject_id is not in the catalog.
        """
        if subject_id is None:
            self._selected = None
            return None

        subject = get_subject(subject_id, self._subjects)
        self._selected = subject
        if not self._store.has_any(subject.id):
            self._store.append(subject.id, Role.ASSISTANT, welcome_text(subject))
            logger.info(f"Started conversation for subject {subject.id}")
        return subject

    def messages_for(self, subject_id: str) -> MessageView:
        return self._store.messages_for(subject_id)

    def state_for(self, subject_id: str) -> SessionState:
        return SessionState(
            subject_id=subject_id,
            is_submitting=self._submitting_subject == subject_id,
            pending_error=self._errors.get(subject_id),
        )

    @property
    def dark_mode(self) -> bool:
        return self._preferences.dark_mode if self._preferences else False

    def toggle_dark_mode(self) -> bool:
        if self._preferences is None:
            raise RuntimeError("No preference store configured")
        return self._preferences.toggle_dark_mode()

    async def submit(self, text: str, attachment: AttachmentSource | None = None) -> SubmitOutcome:
        """Send one user message to the active subject.

        Args:
            text: What the user typed.
            attachment: Optional file to send inline with the message.

        Returns:
            ACCEPTED if the submission ran (successfully or not), otherwise
            the reason it was ignored.

        Raises:
            AttachmentError: If the attachment's declared type or size is
                rejected. Raised before anything is stored.
        """
        text = text.strip()
        if not text and attachment is None:
            return SubmitOutcome.EMPTY
        subject = self._selected
        if subject is None:
            return SubmitOutcome.NO_SUBJECT
        if self._submitting_subject is not None:
            logger.debug("Ignoring submit while another request is in flight")
            return SubmitOutcome.BUSY

        filename = None
        if attachment is not None:
            filename = attachment.filename or "attachment"
            validate_attachment(filename, attachment.content_type, attachment.size)

        # Snapshot before the new message so it is not replayed as history
        prior = list(self._store.messages_for(subject.id))

        self._submitting_subject = subject.id
        try:
            content = text
            if filename is not None:
                marker = attachment_marker(filename)
                content = f"{text}\n\n{marker}" if text else marker
            self._store.append(subject.id, Role.USER, content)

            await self._complete(subject, prior, text, attachment)
        finally:
            self._submitting_subject = None

        return SubmitOutcome.ACCEPTED

    async def _complete(
        self,
        subject: Subject,
        prior: list[Message],
        text: str,
        attachment: AttachmentSource | None,
    ) -> None:
        """Run the request and append the reply or an apology."""
        try:
            encoded: EncodedAttachment | None = None
            if attachment is not None:
                encoded = await read_and_encode(attachment)

            request = build_request(subject, prior, text, encoded, self._generation)
            raw = await self._client.generate_content(request.to_payload())
            reply = interpret_response(raw)
        except Exception as e:
            logger.exception(f"Failed to get response for subject {subject.id}: {e}")
            self._errors[subject.id] = str(e) or e.__class__.__name__
            self._store.append(subject.id, Role.ASSISTANT, APOLOGY_TEXT)
            return

        self._errors.pop(subject.id, None)
        self._store.append(subject.id, Role.ASSISTANT, reply)


def create_session_engine(config: AssistantConfig) -> SessionEngine:
    """Wire a SessionEngine to SQLite storage and the Gemini API."""
    backend = SqliteKeyValueStore(config.db_path)
    return SessionEngine(
        store=MessageStore(backend, (s.id for s in SUBJECTS)),
        client=GeminiClient(config),
        preferences=Preferences(backend),
        generation=config.generation,
    )


# Module-level singleton instance
_session_engine: SessionEngine | None = None


def get_session_engine() -> SessionEngine:
    """Get or create the global session engine.

    Returns:
        The SessionEngine instance.
    """
    global _session_engine
    if _session_engine is None:
        _session_engine = create_session_engine(get_assistant_config())
    return _session_engine
