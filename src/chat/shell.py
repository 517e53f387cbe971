"""Chat shell: the single state object behind the chat page.

Pairs one SessionRepository with one ComposerController and the theme flag.
The view reads ``state()`` (or the individual properties) and forwards user
events to the methods here; subscribers are told whenever state changes,
including when the hint hides itself on a timer.
"""

import logging
from collections.abc import Callable

from src.chat.composer import ComposerController, HeightMeasurer
from src.chat.config import ChatConfig, get_chat_config
from src.chat.repository import SessionRepository
from src.chat.timing import Scheduler
from src.models.schemas import (
    HintState,
    Session,
    SessionView,
    ShellState,
    Theme,
    TriggerSource,
)
from src.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChatShell:
    """Collaborator-facing facade over sessions, composer and theme.

    Every event method is safe to call with stale arguments from the view:
    invalid indices are no-ops and nothing raises.
    """

    def __init__(
        self,
        repository: SessionRepository,
        composer: ComposerController,
    ) -> None:
        self._repository = repository
        self._composer = composer
        self._composer.on_change = self._notify
        self._theme = Theme.LIGHT
        self._listeners: list[Listener] = []

    @property
    def repository(self) -> SessionRepository:
        return self._repository

    @property
    def composer(self) -> ComposerController:
        return self._composer

    @property
    def sessions(self) -> tuple[Session, ...]:
        return self._repository.sessions

    @property
    def active_index(self) -> int:
        return self._repository.active_index

    @property
    def draft(self) -> str:
        return self._composer.draft

    @property
    def hint(self) -> HintState:
        return self._composer.hint

    @property
    def composer_height(self) -> float:
        return self._composer.height

    @property
    def theme(self) -> Theme:
        return self._theme

    def state(self) -> ShellState:
        """Snapshot of everything the view renders."""
        return ShellState(
            sessions=tuple(
                SessionView(title=self._repository.title(s), messages=s.messages)
                for s in self._repository.sessions
            ),
            active_index=self.active_index,
            draft=self.draft,
            hint=self.hint,
            composer_height=self.composer_height,
            theme=self._theme,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for change notifications.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def new_session(self) -> int:
        _, index = self._repository.create()
        self._composer.reset()
        self._notify()
        return index

    def switch_session(self, index: int) -> int:
        """Activate the session at ``index``; the draft is discarded."""
        valid = self._repository.has_index(index)
        current = self._repository.switch_to(index)
        if valid:
            self._composer.reset()
            self._notify()
        return current

    def delete_session(self, index: int) -> bool:
        """Delete the session at ``index`` unless it is the last one.

        Deleting the active session discards the draft.
        """
        was_active = index == self._repository.active_index
        deleted = self._repository.delete_at(index)
        if deleted:
            if was_active:
                self._composer.reset()
            self._notify()
        return deleted

    def update_draft(self, text: str) -> None:
        self._composer.update_draft(text)
        self._notify()

    def submit(self, trigger: TriggerSource = TriggerSource.EXPLICIT) -> bool:
        sent = self._composer.submit(trigger)
        self._notify()
        return sent

    def handle_key(self, key: str, shift: bool = False, cursor: int | None = None) -> bool:
        handled = self._composer.handle_key(key, shift, cursor)
        if handled:
            self._notify()
        return handled

    def dismiss_hint(self) -> None:
        if not self._composer.hint.visible:
            return
        self._composer.dismiss_hint()
        self._notify()

    def toggle_theme(self) -> Theme:
        self._theme = Theme.DARK if self._theme is Theme.LIGHT else Theme.LIGHT
        self._notify()
        return self._theme

    def close(self) -> None:
        """Cancel pending timers and drop all listeners."""
        self._composer.close()
        self._listeners.clear()

    def __enter__(self) -> "ChatShell":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Chat shell listener failed")


def create_chat_shell(
    store: KeyValueStore,
    config: ChatConfig | None = None,
    *,
    scheduler: Scheduler | None = None,
    measurer: HeightMeasurer | None = None,
) -> ChatShell:
    """Build a shell over ``store`` with its persisted sessions loaded.

    Args:
        store: Backend holding the session list.
        config: Optional configuration. Loads from environment if omitted.
        scheduler: Clock and timers for the hint.
        measurer: Composer height measurer.

    Returns:
        A ready ChatShell.
    """
    config = config or get_chat_config()
    repository = SessionRepository(store, title_max_chars=config.title_max_chars)
    repository.load()
    composer = ComposerController(
        repository,
        scheduler,
        measurer,
        explicit_hint_ms=config.explicit_hint_ms,
        keyboard_hint_ms=config.keyboard_hint_ms,
    )
    return ChatShell(repository, composer)
