"""Unit tests for attachment validation and encoding."""

import base64

import pytest
import pytest_check as check

from aithena.parsing.attachment_codec import (
    MAX_FILE_SIZE,
    AttachmentTooLarge,
    InMemoryAttachment,
    UnsupportedAttachmentType,
    decode_attachment,
    describe_media_type,
    encode_attachment,
    normalize_media_type,
    read_and_encode,
    validate_attachment,
)


class TestEncodeAttachment:
    """Tests for successful encoding."""

    def test_payload_decodes_to_original_bytes(self) -> None:
        """Binary content survives encoding unchanged."""
        content = bytes(range(256)) * 4

        result = encode_attachment(content, "data.pdf", "application/pdf")

        check.equal(decode_attachment(result), content)
        check.equal(base64.b64decode(result.data), content)

    def test_records_type_size_and_name(self) -> None:
        """Encoded attachment carries normalized metadata."""
        result = encode_attachment(b"a,b\n1,2\n", "table.csv", "text/csv; charset=utf-8")

        check.equal(result.media_type, "text/csv")
        check.equal(result.size, 8)
        check.equal(result.filename, "table.csv")

    def test_empty_file_is_allowed(self) -> None:
        """Zero-byte files encode to an empty payload."""
        result = encode_attachment(b"", "empty.txt", "text/plain")

        check.equal(result.data, "")
        check.equal(result.size, 0)

    def test_exact_size_limit_is_accepted(self) -> None:
        """A file of exactly MAX_FILE_SIZE bytes is within the limit."""
        result = encode_attachment(b"\x00" * MAX_FILE_SIZE, "big.txt", "text/plain")

        check.equal(result.size, MAX_FILE_SIZE)

    async def test_read_and_encode_reads_source(self) -> None:
        """In-memory sources are read and encoded."""
        source = InMemoryAttachment("notes.md", b"# Notes\n", "text/markdown")

        result = await read_and_encode(source)

        check.equal(result.media_type, "text/markdown")
        check.equal(decode_attachment(result), b"# Notes\n")


class TestAttachmentRejection:
    """Tests for type and size rejection."""

    def test_rejects_image_type(self) -> None:
        """Types outside the allow-list raise UnsupportedAttachmentType."""
        with pytest.raises(UnsupportedAttachmentType, match="image/png"):
            encode_attachment(b"\x89PNG", "photo.png", "image/png")

    def test_rejects_unknown_octet_stream(self) -> None:
        """Untyped files with an unknown extension are rejected."""
        with pytest.raises(UnsupportedAttachmentType):
            validate_attachment("blob.bin", "application/octet-stream", 10)

    def test_rejects_oversized_file(self) -> None:
        """Files over MAX_FILE_SIZE raise AttachmentTooLarge."""
        with pytest.raises(AttachmentTooLarge, match="exceeds maximum"):
            encode_attachment(b"\x00" * (MAX_FILE_SIZE + 1), "big.txt", "text/plain")

    def test_declared_size_checked_before_read(self) -> None:
        """A declared size over the limit is rejected without content."""
        with pytest.raises(AttachmentTooLarge):
            validate_attachment("big.pdf", "application/pdf", MAX_FILE_SIZE + 1)

    def test_unknown_size_skips_size_check(self) -> None:
        """size=None defers the size check to encoding."""
        check.equal(validate_attachment("a.pdf", "application/pdf", None), "application/pdf")


class TestMediaTypes:
    """Tests for media type normalization and labels."""

    def test_strips_parameters_and_case(self) -> None:
        check.equal(normalize_media_type("Text/Plain; charset=UTF-8"), "text/plain")

    def test_guesses_from_extension_when_missing(self) -> None:
        check.equal(normalize_media_type(None, "report.pdf"), "application/pdf")
        check.equal(normalize_media_type("application/octet-stream", "table.csv"), "text/csv")

    def test_describe_known_type(self) -> None:
        check.equal(describe_media_type("application/pdf"), "PDF")
        check.equal(describe_media_type("text/csv"), "CSV")
