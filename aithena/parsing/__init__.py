"""Attachment handling for chat submissions.

Turns user-supplied files into inline payloads the Gemini API accepts.

Responsibilities:
    - Media type normalization and allow-listing
    - Size limit enforcement
    - Base64 encoding of the exact file bytes

Attachments are transient: they live for one submission and are never persisted.
"""

from aithena.parsing.attachment_codec import (
    MAX_FILE_SIZE,
    AttachmentError,
    AttachmentTooLarge,
    EncodedAttachment,
    InMemoryAttachment,
    UnsupportedAttachmentType,
    encode_attachment,
    read_and_encode,
    validate_attachment,
)

__all__ = [
    "MAX_FILE_SIZE",
    "AttachmentError",
    "AttachmentTooLarge",
    "EncodedAttachment",
    "InMemoryAttachment",
    "UnsupportedAttachmentType",
    "encode_attachment",
    "read_and_encode",
    "validate_attachment",
]
