"""Pydantic models shared across the assistant.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Message: one entry of the subject-partitioned conversation log
    - Subject: static catalog entry with its system instruction
    - SessionState: derived per-subject submission state
    - GenerateContentRequest: Gemini generateContent payload
"""

from aithena.models.schemas import Message, Role, SessionState
from aithena.models.subjects import SUBJECTS, Subject, UnknownSubjectError, get_subject

__all__ = [
    "SUBJECTS",
    "Message",
    "Role",
    "SessionState",
    "Subject",
    "UnknownSubjectError",
    "get_subject",
]
