"""Session repository: the ordered chat session list and the active index.

Owns every mutation of the session list and re-serializes the whole list to
the store after each one. Invalid indices and attempts to delete the last
remaining session are silent no-ops, so a stale view can never break the
invariants ``len(sessions) >= 1`` and ``0 <= active_index < len(sessions)``.

Persisted keys:
    - ``sessions``: JSON array of ``{"messages": [...]}`` records (authoritative)
    - ``messages``: JSON array mirroring the active session's messages
    - ``firstMessage``: plain text of the active session's first message

The mirror keys are written for outside inspection and never read back.
"""

import logging

from pydantic_core import PydanticSerializationError

from src.models.schemas import (
    MESSAGE_LIST_ADAPTER,
    SESSION_LIST_ADAPTER,
    TITLE_MAX_CHARS,
    Session,
    clean_text,
    session_title,
)
from src.storage.store import KeyValueStore, dump_json, encode_json, load_json

logger = logging.getLogger(__name__)

SESSIONS_KEY = "sessions"
MESSAGES_KEY = "messages"
FIRST_MESSAGE_KEY = "firstMessage"


def _default_sessions() -> list[Session]:
    return [Session()]


class SessionRepository:
    """Ordered list of chat sessions persisted through a key-value store."""

    def __init__(self, store: KeyValueStore, title_max_chars: int = TITLE_MAX_CHARS) -> None:
        """Initialize the repository with a single empty session.

        Call ``load()`` to replace it with the persisted list.

        Args:
            store: Backend that holds the serialized session list.
            title_max_chars: Characters of the first message kept in titles.
        """
        self._store = store
        self._title_max_chars = title_max_chars
        self._sessions: list[Session] = _default_sessions()
        self._active_index = 0

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_session(self) -> Session:
        return self._sessions[self._active_index]

    def __len__(self) -> int:
        return len(self._sessions)

    def load(self) -> tuple[Session, ...]:
        """Load the persisted session list.

        Missing or malformed data yields one empty session. The newest
        session becomes active.

        Returns:
            The loaded sessions.
        """
        self._sessions = load_json(self._store, SESSIONS_KEY, SESSION_LIST_ADAPTER, _default_sessions)
        self._active_index = len(self._sessions) - 1
        logger.info(f"Loaded {len(self._sessions)} chat session(s)")
        return self.sessions

    def create(self) -> tuple[tuple[Session, ...], int]:
        """Append an empty session and make it active.

        Returns:
            The session list and the new active index.
        """
        sessions = [*self._sessions, Session()]
        self._commit(sessions, len(sessions) - 1)
        logger.debug(f"Created session {self._active_index}")
        return self.sessions, self._active_index

    def has_index(self, index: int) -> bool:
        """Whether ``index`` addresses an existing session."""
        return 0 <= index < len(self._sessions)

    def switch_to(self, index: int) -> int:
        """Make the session at ``index`` active.

        Out-of-range indices are ignored.

        Returns:
            The active index after the call.
        """
        if not self.has_index(index):
            logger.debug(f"Ignoring switch to invalid session index {index}")
            return self._active_index

        self._active_index = index
        self._persist_mirrors()
        return self._active_index

    def delete_at(self, index: int) -> bool:
        """Remove the session at ``index``.

        The last remaining session is never removed. When the active session
        is deleted, the one before it becomes active; deleting an earlier
        session shifts the active index down by one.

        Returns:
            True if a session was removed.
        """
        if len(self._sessions) == 1:
            logger.debug("Refusing to delete the only session")
            return False
        if not self.has_index(index):
            logger.debug(f"Ignoring delete of invalid session index {index}")
            return False

        sessions = self._sessions[:index] + self._sessions[index + 1 :]
        active = self._active_index
        if index == active:
            active = max(0, active - 1)
        elif index < active:
            active -= 1
        if not self._commit(sessions, active):
            return False
        logger.debug(f"Deleted session {index}, active is now {active}")
        return True

    def append_message(self, text: str) -> bool:
        """Append ``text`` to the active session.

        Args:
            text: Trimmed, non-empty message text.

        Returns:
            True if the message was stored.
        """
        text = clean_text(text)
        if not text:
            logger.debug("Ignoring empty message")
            return False

        sessions = list(self._sessions)
        sessions[self._active_index] = self.active_session.with_message(text)
        return self._commit(sessions, self._active_index)

    def title(self, session: Session) -> str:
        """Display title of ``session``; see ``session_title``."""
        return session_title(session, self._title_max_chars)

    def _commit(self, sessions: list[Session], active_index: int) -> bool:
        # Memory changes only once the new list has serialized.
        try:
            payload = encode_json(SESSION_LIST_ADAPTER, sessions)
        except PydanticSerializationError as e:
            logger.error(f"Dropping session change that cannot be serialized: {e}")
            return False

        self._sessions = sessions
        self._active_index = active_index
        self._store.set(SESSIONS_KEY, payload)
        self._persist_mirrors()
        return True

    def _persist_mirrors(self) -> None:
        messages = list(self.active_session.messages)
        dump_json(self._store, MESSAGES_KEY, MESSAGE_LIST_ADAPTER, messages)
        self._store.set(FIRST_MESSAGE_KEY, messages[0] if messages else "")
