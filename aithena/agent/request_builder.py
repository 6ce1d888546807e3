"""Build Gemini generateContent requests from a subject's history."""

from collections.abc import Iterable

from aithena.models.gemini import (
    Content,
    GenerateContentRequest,
    GenerationConfig,
    InlineData,
    Part,
)
from aithena.models.schemas import Message, Role
from aithena.models.subjects import Subject
from aithena.parsing.attachment_codec import EncodedAttachment, describe_media_type

# Stored role -> wire role
WIRE_ROLES: dict[Role, str] = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


def to_wire_role(role: Role) -> str:
    return WIRE_ROLES[role]


def attachment_caption(attachment: EncodedAttachment) -> str:
    """Default prompt used when a file is sent without text."""
    return f"Please analyze this {describe_media_type(attachment.media_type)} file"


def build_user_turn(text: str, attachment: EncodedAttachment | None = None) -> Content:
    """Build the newest user turn, with the attachment inline if present."""
    text = text.strip()
    if attachment is None:
        return Content(role=WIRE_ROLES[Role.USER], parts=[Part(text=text)])

    return Content(
        role=WIRE_ROLES[Role.USER],
        parts=[
            Part(text=text or attachment_caption(attachment)),
            Part(
                inline_data=InlineData(
                    mime_type=attachment.media_type,
                    data=attachment.data,
                )
            ),
        ],
    )


def build_request(
    subject: Subject,
    prior_messages: Iterable[Message],
    new_user_text: str,
    attachment: EncodedAttachment | None = None,
    generation: GenerationConfig | None = None,
) -> GenerateContentRequest:
    """Build the request for one submission.

    The whole prior conversation is replayed in stored order, followed by
    the new user turn. The subject's system prompt travels once, in the
    request's system instruction rather than as a turn.

    Args:
        subject: Active subject.
        prior_messages: The subject's messages before this submission.
        new_user_text: Text typed by the user (may be empty with an attachment).
        attachment: Encoded file to send inline with the new turn.
        generation: Sampling parameters. Defaults to GenerationConfig().

    Returns:
        GenerateContentRequest ready for to_payload().
    """
    contents = [
        Content(role=to_wire_role(m.role), parts=[Part(text=m.content)])
        for m in prior_messages
    ]
    contents.append(build_user_turn(new_user_text, attachment))

    return GenerateContentRequest(
        contents=contents,
        system_instruction=Content(parts=[Part(text=subject.system_prompt)]),
        generation_config=generation or GenerationConfig(),
    )
