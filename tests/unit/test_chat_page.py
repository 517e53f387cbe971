"""Unit tests for the view glue in the NiceGUI chat page."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest_check as check

from src.chat.config import ChatConfig
from src.chat.shell import ChatShell
from src.storage.store import FileStore, MemoryStore
from src.ui.chat_page import bind_shell, composer_props, open_store, send_from_button
from tests.conftest import FakeScheduler


class TestComposerProps:
    """Tests for sizing the composer textarea."""

    def test_targets_native_textarea(self) -> None:
        """Height goes to the inner textarea via input-style."""
        assert composer_props(48.0) == 'input-style="height: 48px"'

    def test_rounds_to_whole_pixels(self) -> None:
        """Fractional heights are rendered as whole pixels."""
        check.equal(composer_props(191.6), 'input-style="height: 192px"')
        check.equal(composer_props(72.2), 'input-style="height: 72px"')


class TestSendFromButton:
    """Tests for the send button handler."""

    def test_successful_send_refocuses_composer(self, shell: ChatShell) -> None:
        """After a message goes out the caret is back in the composer."""
        input_field = MagicMock()
        shell.update_draft("hello")

        check.is_true(send_from_button(shell, input_field))
        input_field.run_method.assert_called_once_with("focus")
        check.equal(shell.sessions[-1].messages, ("hello",))

    def test_empty_send_shows_hint_without_focus(self, shell: ChatShell) -> None:
        """An empty send shows the hint and leaves focus alone."""
        input_field = MagicMock()

        check.is_false(send_from_button(shell, input_field))
        input_field.run_method.assert_not_called()
        check.is_true(shell.hint.visible)


class TestBindShell:
    """Tests for wiring a shell to a page client."""

    def test_disconnect_only_dismisses_hint(
        self, shell: ChatShell, scheduler: FakeScheduler
    ) -> None:
        """A reconnecting page keeps rendering after a disconnect."""
        client = MagicMock()
        render = MagicMock()
        bind_shell(client, shell, render)
        client.on_disconnect.assert_called_once_with(shell.dismiss_hint)

        shell.submit()
        on_disconnect = client.on_disconnect.call_args.args[0]
        on_disconnect()

        check.is_false(shell.hint.visible)
        check.equal(scheduler.pending, [])

        render.reset_mock()
        shell.toggle_theme()
        render.assert_called_once_with()


class TestOpenStore:
    """Tests for choosing the session store backend."""

    def test_file_backend(self, tmp_path: Path) -> None:
        """The file backend writes to the configured path."""
        path = tmp_path / "storage.json"
        store = open_store(ChatConfig(storage_backend="file", storage_path=path))

        check.is_instance(store, FileStore)
        check.equal(store.path, path)

    def test_memory_backend(self) -> None:
        """The memory backend starts empty."""
        store = open_store(ChatConfig(storage_backend="memory"))

        check.is_instance(store, MemoryStore)
        check.is_none(store.get("sessions"))
