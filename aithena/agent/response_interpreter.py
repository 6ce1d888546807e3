"""Extract the reply text from a generateContent response envelope.

The envelope is not schema-validated upstream, so every step of the
path candidates[0].content.parts[*].text is type-checked before use.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from aithena.agent.errors import EmptyResponse, MalformedResponse


def _field(container: Any, key: str, path: str) -> Any:
    if not isinstance(container, Mapping):
        raise MalformedResponse(f"Expected an object at {path}")
    if key not in container:
        raise MalformedResponse(f"Missing field {path}.{key}")
    return container[key]


def _first(items: Any, path: str) -> Any:
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise MalformedResponse(f"Expected a list at {path}")
    if not items:
        raise MalformedResponse(f"Empty list at {path}")
    return items[0]


def _block_reason(raw: Any) -> str | None:
    feedback = raw.get("promptFeedback") if isinstance(raw, Mapping) else None
    if isinstance(feedback, Mapping):
        reason = feedback.get("blockReason")
        if isinstance(reason, str) and reason:
            return reason
    return None


def interpret_response(raw: Any) -> str:
    """Return the first candidate's text.

    Args:
        raw: Decoded JSON body returned by the API.

    Returns:
        The reply text with all text parts of the first candidate joined.

    Raises:
        EmptyResponse: If the prompt was blocked or the candidate has no text.
        MalformedResponse: If the expected structure is absent.
    """
    if not isinstance(raw, Mapping):
        raise MalformedResponse("Response body is not a JSON object")

    candidates = raw.get("candidates")
    if not candidates:
        reason = _block_reason(raw)
        if reason is not None:
            raise EmptyResponse(f"Prompt blocked: {reason}")

    candidate = _first(_field(raw, "candidates", "$"), "$.candidates")
    content = _field(candidate, "content", "$.candidates[0]")
    parts = _field(content, "parts", "$.candidates[0].content")
    _first(parts, "$.candidates[0].content.parts")

    texts = [p["text"] for p in parts if isinstance(p, Mapping) and isinstance(p.get("text"), str)]
    if not texts:
        raise MalformedResponse("No text part in $.candidates[0].content.parts")

    text = "".join(texts)
    if not text.strip():
        raise EmptyResponse("Response contained no text")
    return text
