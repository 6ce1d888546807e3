"""NiceGUI chat interface over the session engine."""

import asyncio
from datetime import datetime

from nicegui import events, ui

from aithena.agent.session_engine import SessionEngine, get_session_engine
from aithena.models.schemas import Message, Role
from aithena.parsing.attachment_codec import (
    ALLOWED_MEDIA_TYPES,
    MAX_FILE_SIZE,
    AttachmentError,
    InMemoryAttachment,
    validate_attachment,
)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .body--dark .message-assistant { background: #1f2937; color: #f3f4f6; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


def _format_time(message: Message) -> str:
    return datetime.fromtimestamp(message.timestamp / 1000).strftime("%I:%M %p")


def render_message(message: Message) -> None:
    is_user = message.role is Role.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-assistant"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes("max-w-[80%] gap-1"):
            with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                ui.markdown(message.content).classes("text-sm")
            ui.label(_format_time(message)).classes(
                f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
            )


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    engine: SessionEngine = get_session_engine()
    dark = ui.dark_mode(engine.dark_mode)
    pending: dict[str, InMemoryAttachment | None] = {"file": None}

    input_field: ui.textarea
    send_btn: ui.button
    upload: ui.upload

    @ui.refreshable
    def messages_view() -> None:
        subject = engine.selected_subject
        if subject is None:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.label("Welcome to Aithena").classes("text-2xl font-semibold")
                ui.label("Select a subject to start your learning journey.").classes(
                    "text-gray-500"
                )
            return

        for message in engine.messages_for(subject.id):
            render_message(message)
        if engine.is_submitting:
            with ui.row().classes("gap-1 px-4 py-3 message-assistant"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")

    @ui.refreshable
    def subject_list() -> None:
        selected = engine.selected_subject
        for subject in engine.subjects:
            active = selected is not None and selected.id == subject.id
            with (
                ui.button(on_click=lambda s=subject: choose(s.id))
                .props("flat no-caps align=left" + (" color=primary" if active else ""))
                .classes("w-full")
            ):
                with ui.column().classes("items-start gap-0"):
                    ui.label(f"{subject.icon} {subject.name}").classes("font-medium")
                    ui.label(subject.description).classes("text-xs text-gray-500")

    def choose(subject_id: str) -> None:
        engine.select_subject(subject_id)
        subject_list.refresh()
        messages_view.refresh()

    def toggle_dark() -> None:
        dark.set_value(engine.toggle_dark_mode())

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        attachment = InMemoryAttachment(e.file.name, content, e.file.content_type)
        try:
            validate_attachment(attachment.filename, attachment.content_type, attachment.size)
        except AttachmentError as err:
            ui.notify(str(err), type="negative")
            upload.reset()
            return
        pending["file"] = attachment
        ui.notify(f"Attached {attachment.filename}")

    async def send_message() -> None:
        text = input_field.value or ""
        attachment = pending["file"]
        if (not text.strip() and attachment is None) or engine.is_submitting:
            return

        input_field.value = ""
        pending["file"] = None
        upload.reset()
        send_btn.disable()

        task = asyncio.create_task(engine.submit(text, attachment))
        # Let submit store the user message before showing it
        await asyncio.sleep(0)
        messages_view.refresh()
        try:
            await task
        except AttachmentError as err:
            ui.notify(str(err), type="negative")
        finally:
            send_btn.enable()
            messages_view.refresh()

    # === UI Layout ===
    with ui.left_drawer(value=True).classes("p-4 gap-2"):
        ui.label("Subjects").classes("text-sm font-semibold text-gray-500")
        subject_list()
        ui.space()
        ui.switch("Dark mode", value=engine.dark_mode, on_change=toggle_dark)

    with ui.header().classes("items-center justify-between px-5"):
        ui.label("Aithena").classes("text-lg font-semibold")

    with ui.column().classes("w-full max-w-3xl mx-auto gap-4 pb-32"):
        messages_view()

    with ui.footer().classes("bg-white dark:bg-gray-900 p-3"):
        with ui.row().classes("w-full max-w-3xl mx-auto items-end gap-2"):
            upload = (
                ui.upload(
                    on_upload=handle_upload,
                    max_file_size=MAX_FILE_SIZE,
                    auto_upload=True,
                )
                .props(f'accept="{",".join(ALLOWED_MEDIA_TYPES)}" flat dense')
                .classes("w-48")
            )
            input_field = (
                ui.textarea(placeholder="Type your message...")
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")


def main() -> None:
    ui.run(title="Aithena", port=8080, reload=False)


if __name__ == "__main__":
    main()
