"""Chat and session endpoints over the session engine.

Exposes the same operations the UI uses: subject selection, message
history, submission and the dark-mode preference.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from aithena.agent.session_engine import SessionEngine, SubmitOutcome, get_session_engine
from aithena.models.schemas import (
    ChatResponse,
    DarkModeResponse,
    Message,
    SelectSubjectRequest,
    SessionInfo,
)
from aithena.models.subjects import Subject, UnknownSubjectError
from aithena.parsing.attachment_codec import AttachmentTooLarge, UnsupportedAttachmentType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

EngineDep = Annotated[SessionEngine, Depends(get_session_engine)]

_REJECTIONS = {
    SubmitOutcome.EMPTY: (status.HTTP_400_BAD_REQUEST, "Message or file is required"),
    SubmitOutcome.NO_SUBJECT: (status.HTTP_409_CONFLICT, "No subject selected"),
    SubmitOutcome.BUSY: (status.HTTP_409_CONFLICT, "A message is already being processed"),
}


def _session_info(engine: SessionEngine) -> SessionInfo:
    selected = engine.selected_subject
    return SessionInfo(
        selected_subject=selected.id if selected else None,
        is_submitting=engine.is_submitting,
        dark_mode=engine.dark_mode,
    )


def _require_subject(engine: SessionEngine, subject_id: str) -> None:
    if all(s.id != subject_id for s in engine.subjects):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown subject: {subject_id}",
        )


@router.get("/subjects", response_model=list[Subject])
async def list_subjects(engine: EngineDep) -> list[Subject]:
    """List the subject catalog in display order."""
    return list(engine.subjects)


@router.get("/subjects/{subject_id}/messages", response_model=list[Message])
async def get_messages(subject_id: str, engine: EngineDep) -> list[Message]:
    """Return a subject's messages in creation order."""
    _require_subject(engine, subject_id)
    return list(engine.messages_for(subject_id))


@router.get("/session", response_model=SessionInfo)
async def get_session(engine: EngineDep) -> SessionInfo:
    """Return the engine-wide session state."""
    return _session_info(engine)


@router.put("/session/subject", response_model=SessionInfo)
async def select_subject(request: SelectSubjectRequest, engine: EngineDep) -> SessionInfo:
    """Activate a subject, or deselect with a null subject_id.

    Raises:
        404: Unknown subject.
    """
    try:
        engine.select_subject(request.subject_id)
    except UnknownSubjectError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown subject: {request.subject_id}",
        ) from e
    return _session_info(engine)


@router.post("/chat", response_model=ChatResponse)
async def chat(
    engine: EngineDep,
    message: Annotated[str, Form()] = "",
    file: Annotated[UploadFile | None, File()] = None,
) -> ChatResponse:
    """Submit a message, optionally with one attached file, to the active subject.

    Failures talking to Gemini are not errors here: they show up as an
    apology message in the returned history and as state.pending_error.

    Raises:
        400: Empty submission or unsupported file type.
        409: No subject selected, or a submission is already in flight.
        413: File exceeds the size limit.
    """
    if file is not None and not file.filename:
        file = None
    subject = engine.selected_subject

    try:
        outcome = await engine.submit(message, attachment=file)
    except UnsupportedAttachmentType as e:
        logger.warning(f"Rejected attachment {e.filename}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except AttachmentTooLarge as e:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=str(e),
        ) from e

    if outcome in _REJECTIONS or subject is None:
        status_code, detail = _REJECTIONS.get(outcome, _REJECTIONS[SubmitOutcome.NO_SUBJECT])
        raise HTTPException(status_code=status_code, detail=detail)

    return ChatResponse(
        subject_id=subject.id,
        messages=list(engine.messages_for(subject.id)),
        state=engine.state_for(subject.id),
    )


@router.post("/preferences/dark-mode/toggle", response_model=DarkModeResponse)
async def toggle_dark_mode(engine: EngineDep) -> DarkModeResponse:
    """Flip the persisted dark-mode preference."""
    return DarkModeResponse(dark_mode=engine.toggle_dark_mode())
