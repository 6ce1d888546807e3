"""Conversation logic for the study assistant.

Turns user submissions into Gemini requests and replies into log entries.

Responsibilities:
    - Session engine: active subject, in-flight guard, failure containment
    - Request building from a subject's stored history
    - Defensive extraction of reply text from response envelopes
    - HTTP client for the generateContent endpoint

Maintains clean separation from the HTTP and UI layers.
"""

from aithena.agent.config import AssistantConfig, get_assistant_config
from aithena.agent.session_engine import SessionEngine, SubmitOutcome, get_session_engine

__all__ = [
    "AssistantConfig",
    "SessionEngine",
    "SubmitOutcome",
    "get_assistant_config",
    "get_session_engine",
]
