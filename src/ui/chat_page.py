"""NiceGUI chat page bound to a ChatShell."""

import os
from collections.abc import Callable

from nicegui import Client, app, ui

from src.chat.composer import HINT_TEXT, LineMetrics
from src.chat.config import ChatConfig, get_chat_config
from src.chat.shell import ChatShell, create_chat_shell
from src.models.schemas import Theme, TriggerSource
from src.storage.store import FileStore, KeyValueStore, MemoryStore

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { overflow: hidden; }

    .app-name { font-weight: 600; letter-spacing: 0.04em; }

    .session-item { border-radius: 8px; cursor: pointer; }
    .session-item.active { background: rgba(102, 126, 234, 0.15); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
        white-space: pre-wrap;
    }

    .input-box {
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #667eea; }
    .input-box textarea { resize: none; overflow-y: auto; }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }

    .hint-popup {
        background: #1f2937;
        color: white;
        border-radius: 10px;
    }
</style>
"""

# Approximate textarea metrics at 1.05rem; the browser's own layout is not
# visible server-side.
COMPOSER_METRICS = LineMetrics(line_height=24.0, padding=24.0, chars_per_line=70)


def open_store(config: ChatConfig) -> KeyValueStore:
    """Select the session store for the configured backend."""
    if config.storage_backend == "file":
        return FileStore(config.storage_path)
    if config.storage_backend == "memory":
        return MemoryStore()
    return MemoryStore(app.storage.user)


def composer_props(height: float) -> str:
    """QInput props that size the native textarea to ``height`` pixels."""
    return f'input-style="height: {height:.0f}px"'


def send_from_button(shell: ChatShell, input_field: ui.textarea) -> bool:
    """Explicit submit; the composer gets focus back when a message went out."""
    sent = shell.submit(TriggerSource.EXPLICIT)
    if sent:
        input_field.run_method("focus")
    return sent


def bind_shell(client: Client, shell: ChatShell, render: Callable[[], None]) -> None:
    """Re-render on shell changes for the lifetime of the page.

    The page outlives reconnects, so a disconnect only drops the hint and
    its pending timer.
    """
    shell.subscribe(render)
    client.on_disconnect(shell.dismiss_hint)


@ui.page("/")
def chat_page(client: Client) -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_chat_config()
    shell = create_chat_shell(open_store(config), config, measurer=COMPOSER_METRICS)
    dark = ui.dark_mode(False)

    theme_btn: ui.button
    input_field: ui.textarea

    @ui.refreshable
    def session_list() -> None:
        state = shell.state()
        for index, session in enumerate(state.sessions):
            active = "active" if index == state.active_index else ""
            with ui.row().classes(f"w-full session-item {active} px-2 py-1 items-center no-wrap"):
                ui.label(session.title).classes("flex-grow truncate text-sm").on(
                    "click", lambda i=index: shell.switch_session(i)
                )
                delete_btn = ui.button(
                    icon="delete", on_click=lambda i=index: shell.delete_session(i)
                ).props("flat round dense size=sm")
                if len(state.sessions) == 1:
                    delete_btn.disable()

    @ui.refreshable
    def message_list() -> None:
        messages = shell.repository.active_session.messages
        if not messages:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Start a conversation").classes("text-lg text-gray-400")
            return
        for text in messages:
            with ui.row().classes("w-full justify-end"):
                ui.label(text).classes("max-w-[70%] px-4 py-3 text-sm message-user")

    @ui.refreshable
    def hint_popup() -> None:
        if not shell.hint.visible:
            return
        with ui.row().classes("hint-popup px-4 py-2 items-center gap-2"):
            ui.label(HINT_TEXT).classes("text-sm")
            ui.button(icon="close", on_click=shell.dismiss_hint).props(
                "flat round dense size=sm color=white"
            )

    def on_input(value: str | None) -> None:
        value = value or ""
        if value != shell.draft:
            shell.update_draft(value)

    def render() -> None:
        is_dark = shell.theme is Theme.DARK
        dark.set_value(is_dark)
        theme_btn.props(f"icon={'light_mode' if is_dark else 'dark_mode'}")
        if (input_field.value or "") != shell.draft:
            input_field.set_value(shell.draft)
        input_field.props(composer_props(shell.composer_height))
        session_list.refresh()
        message_list.refresh()
        hint_popup.refresh()

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        with ui.column().classes("w-64 h-full p-3 gap-2 border-r"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Thespis").classes("app-name text-lg")
                theme_btn = ui.button(on_click=shell.toggle_theme).props(
                    "flat round icon=dark_mode"
                )
            ui.button("New chat", icon="add", on_click=shell.new_session).props(
                "flat no-caps"
            ).classes("w-full")
            with ui.scroll_area().classes("flex-grow w-full"):
                session_list()

        with ui.column().classes("flex-grow h-full p-4 gap-3"):
            with ui.scroll_area().classes("flex-grow w-full"):
                with ui.column().classes("w-full gap-3"):
                    message_list()

            with ui.column().classes("w-full gap-1"):
                hint_popup()
                with ui.row().classes("w-full gap-3 items-end no-wrap"):
                    with ui.element("div").classes("flex-grow input-box px-3 py-1"):
                        input_field = (
                            ui.textarea(
                                placeholder="Type your message...",
                                on_change=lambda e: on_input(e.value),
                            )
                            .props("borderless dense rows=1")
                            .classes("w-full")
                            .style("font-size: 1.05rem")
                            .props(composer_props(shell.composer_height))
                            .on("keydown.enter.exact.prevent", lambda: shell.handle_key("Enter"))
                        )
                    ui.button(
                        icon="send", on_click=lambda: send_from_button(shell, input_field)
                    ).props("round unelevated").classes("send-btn")

    bind_shell(client, shell, render)


def main() -> None:
    ui.run(
        title="Thespis",
        port=int(os.getenv("PORT", "8080")),
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "thespis-secret"),
        reload=False,
    )


if __name__ == "__main__":
    main()
