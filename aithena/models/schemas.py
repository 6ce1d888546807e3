from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a stored message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single entry in the conversation log.

    Messages are created only by the session engine and never edited.

    Attributes:
        id: Globally unique identifier (uuid4).
        role: Who wrote the message.
        content: The message text.
        subject: Id of the subject partition this message belongs to.
        timestamp: Creation time in milliseconds since the epoch.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    content: str
    subject: str
    timestamp: int = Field(ge=0)


class SessionState(BaseModel):
    """Derived submission state for one subject.

    Attributes:
        subject_id: The subject this state describes.
        is_submitting: Whether a request for this subject is in flight.
        pending_error: Text of the last failed submission, if not yet superseded.
    """

    subject_id: str
    is_submitting: bool = False
    pending_error: str | None = None


class SelectSubjectRequest(BaseModel):
    """Request payload for selecting the active subject.

    Attributes:
        subject_id: Subject to activate, or None to deselect.
    """

    subject_id: str | None = None


class SessionInfo(BaseModel):
    """Engine-wide session details.

    Attributes:
        selected_subject: Id of the active subject, if any.
        is_submitting: Whether a submission is in flight.
        dark_mode: Persisted display preference.
    """

    selected_subject: str | None = Field(None, description="Active subject id")
    is_submitting: bool = Field(False, description="True while a request is in flight")
    dark_mode: bool = Field(False, description="Persisted dark-mode preference")


class ChatResponse(BaseModel):
    """Result of a chat submission.

    Attributes:
        subject_id: Subject the submission was made under.
        messages: The subject's full ordered history after the submission.
        state: Submission state after the request resolved.
    """

    subject_id: str = Field(..., description="Subject the message was sent to")
    messages: list[Message] = Field(default_factory=list, description="Ordered subject history")
    state: SessionState


class DarkModeResponse(BaseModel):
    """Current value of the dark-mode preference."""

    dark_mode: bool
