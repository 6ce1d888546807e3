"""Attachment validation and encoding for inline Gemini parts.

Checks the declared media type against an allow-list and the byte size
against a fixed limit, then base64-encodes the exact file content.
"""

import base64
import binascii
import logging
import mimetypes
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB
OCTET_STREAM = "application/octet-stream"

# Media type -> label used in the default caption
ALLOWED_MEDIA_TYPES: dict[str, str] = {
    # Documents
    "application/pdf": "PDF",
    "application/rtf": "RTF",
    "text/rtf": "RTF",
    # Code
    "text/x-python": "Python",
    "application/x-python": "Python",
    "text/javascript": "JavaScript",
    "application/javascript": "JavaScript",
    "application/x-javascript": "JavaScript",
    "text/css": "CSS",
    # Markup
    "text/html": "HTML",
    "text/xml": "XML",
    "application/xml": "XML",
    "text/markdown": "Markdown",
    "text/md": "Markdown",
    # Tabular
    "text/csv": "CSV",
    "text/tab-separated-values": "TSV",
    # Plain text
    "text/plain": "text",
    "application/json": "JSON",
}

# mimetypes does not know these on every platform
_EXTENSION_FALLBACKS = {
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".py": "text/x-python",
    ".tsv": "text/tab-separated-values",
}


class AttachmentError(Exception):
    """Base class for attachment rejections."""

    pass


class UnsupportedAttachmentType(AttachmentError):
    """Raised when the media type is not in the allow-list."""

    def __init__(self, media_type: str, filename: str | None = None) -> None:
        self.media_type = media_type
        self.filename = filename
        shown = media_type or "unknown"
        super().__init__(f"Unsupported file type: {shown}")


class AttachmentTooLarge(AttachmentError):
    """Raised when a file exceeds MAX_FILE_SIZE."""

    def __init__(self, size: int, limit: int = MAX_FILE_SIZE) -> None:
        self.size = size
        self.limit = limit
        size_mb = size / (1024 * 1024)
        limit_mb = limit / (1024 * 1024)
        super().__init__(f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)")


class EncodedAttachment(BaseModel):
    """Transport-ready attachment.

    Attributes:
        filename: Original file name.
        media_type: Normalized, allow-listed media type.
        size: Size of the raw content in bytes.
        data: Standard base64 encoding of the raw content.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    media_type: str
    size: int = Field(ge=0)
    data: str


class AttachmentSource(Protocol):
    """Anything that can hand over a file's bytes asynchronously.

    FastAPI's UploadFile satisfies this protocol.
    """

    filename: str | None
    content_type: str | None
    size: int | None

    async def read(self) -> bytes: ...


class InMemoryAttachment:
    """Attachment source backed by bytes already in memory."""

    def __init__(self, filename: str, content: bytes, content_type: str | None = None) -> None:
        self.filename = filename
        self.content_type = content_type
        self._content = content

    @property
    def size(self) -> int:
        return len(self._content)

    async def read(self) -> bytes:
        return self._content


def normalize_media_type(declared: str | None, filename: str | None = None) -> str:
    """Normalize a declared media type, guessing from the filename when absent.

    Args:
        declared: Content type as declared by the client, possibly with parameters.
        filename: Original file name used for guessing.

    Returns:
        Lowercased media type without parameters, or "" if nothing is known.
    """
    media_type = (declared or "").lower().split(";", 1)[0].strip()
    if media_type and media_type != OCTET_STREAM:
        return media_type

    if filename:
        guessed, _ = mimetypes.guess_type(filename, strict=False)
        if guessed:
            return guessed.lower()
        suffix = "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if suffix in _EXTENSION_FALLBACKS:
            return _EXTENSION_FALLBACKS[suffix]

    return media_type


def describe_media_type(media_type: str) -> str:
    """Return the human label for an allow-listed media type."""
    return ALLOWED_MEDIA_TYPES.get(media_type, media_type)


def validate_attachment(filename: str | None, media_type: str | None, size: int | None) -> str:
    """Validate type and size before any content is read.

    Args:
        filename: Original file name.
        media_type: Declared content type.
        size: Byte size if known, None otherwise.

    Returns:
        The normalized media type.

    Raises:
        UnsupportedAttachmentType: If the type is not allow-listed.
        AttachmentTooLarge: If the size exceeds MAX_FILE_SIZE.
    """
    normalized = normalize_media_type(media_type, filename)
    if normalized not in ALLOWED_MEDIA_TYPES:
        raise UnsupportedAttachmentType(normalized, filename)

    if size is not None and size > MAX_FILE_SIZE:
        raise AttachmentTooLarge(size)

    return normalized


def encode_attachment(content: bytes, filename: str, media_type: str | None) -> EncodedAttachment:
    """Encode raw file content for inline transport.

    Args:
        content: Raw bytes of the file.
        filename: Original file name.
        media_type: Declared content type.

    Returns:
        EncodedAttachment holding the base64 payload.

    Raises:
        UnsupportedAttachmentType: If the type is not allow-listed.
        AttachmentTooLarge: If the content exceeds MAX_FILE_SIZE.
    """
    normalized = validate_attachment(filename, media_type, len(content))

    return EncodedAttachment(
        filename=filename,
        media_type=normalized,
        size=len(content),
        data=base64.b64encode(content).decode("ascii"),
    )


def decode_attachment(attachment: EncodedAttachment) -> bytes:
    """Recover the original bytes of an encoded attachment.

    Raises:
        ValueError: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(attachment.data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload for {attachment.filename}: {e}") from e


async def read_and_encode(source: AttachmentSource) -> EncodedAttachment:
    """Read an attachment source and encode its content.

    Args:
        source: Upload or in-memory attachment.

    Returns:
        EncodedAttachment for the source's bytes.
    """
    content = await source.read()
    filename = source.filename or "attachment"
    encoded = encode_attachment(content, filename, source.content_type)
    logger.info(f"Encoded attachment {filename} ({encoded.media_type}, {encoded.size} bytes)")
    return encoded
