"""Failures raised while talking to Gemini.

Attachment rejections live in aithena.parsing.attachment_codec.
"""


class AssistantError(Exception):
    """Base class for failures after a submission has started."""

    pass


class NetworkFailure(AssistantError):
    """Raised on transport errors and non-success HTTP statuses."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class MalformedResponse(AssistantError):
    """Raised when the response envelope lacks the expected structure."""

    pass


class EmptyResponse(AssistantError):
    """Raised when the response is well-formed but carries no text."""

    pass
