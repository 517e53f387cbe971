from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

NEW_CHAT_TITLE = "New chat"
TITLE_MAX_CHARS = 32
ELLIPSIS = "…"


class TriggerSource(str, Enum):
    """Where a submit attempt came from.

    The send button is an explicit submit; Enter in the composer is a
    keyboard submit. They show the empty-input hint for different durations.
    """

    EXPLICIT = "explicit"
    KEYBOARD = "keyboard"


class Theme(str, Enum):
    """Color scheme of the shell."""

    LIGHT = "light"
    DARK = "dark"


class Session(BaseModel):
    """A chat session: the messages the user typed, in order.

    Sessions have no id; they are addressed by position in the session list.

    Attributes:
        messages: User-authored message strings, oldest first.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[str, ...] = Field(default=(), description="Messages, oldest first")

    def with_message(self, text: str) -> "Session":
        """Return a copy of this session with ``text`` appended."""
        return Session(messages=(*self.messages, text))


# Persisted shape of the `sessions` key. A stored empty list is rejected so
# that loading falls back to the default single-session list.
SessionList = Annotated[list[Session], Field(min_length=1)]
SESSION_LIST_ADAPTER: TypeAdapter[list[Session]] = TypeAdapter(SessionList)
MESSAGE_LIST_ADAPTER: TypeAdapter[list[str]] = TypeAdapter(list[str])


def clean_text(text: str) -> str:
    """Make ``text`` encodable as UTF-8.

    Split surrogate pairs are joined back into one character; lone
    surrogates become U+FFFD.
    """
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def session_title(session: Session, max_chars: int = TITLE_MAX_CHARS) -> str:
    """Derive the sidebar title of a session.

    Args:
        session: Session to title.
        max_chars: Characters kept before the ellipsis.

    Returns:
        The first message, truncated with an ellipsis when longer than
        ``max_chars``, or "New chat" for a session without messages.
    """
    if not session.messages:
        return NEW_CHAT_TITLE
    first = session.messages[0]
    if len(first) > max_chars:
        return first[:max_chars] + ELLIPSIS
    return first


class HintState(BaseModel):
    """Visibility of the "empty input" hint.

    Attributes:
        visible: Whether the hint is shown.
        expires_at: Scheduler time at which the hint hides itself.
    """

    model_config = ConfigDict(frozen=True)

    visible: bool = False
    expires_at: float | None = None


HIDDEN_HINT = HintState()


class SessionView(BaseModel):
    """A session as the view renders it."""

    title: str
    messages: tuple[str, ...]


class ShellState(BaseModel):
    """Read-only snapshot of everything the view renders.

    Attributes:
        sessions: Sessions in display order with derived titles.
        active_index: Position of the active session.
        draft: Current composer text.
        hint: Empty-input hint state.
        composer_height: Composer height in pixels.
        theme: Current color scheme.
    """

    model_config = ConfigDict(frozen=True)

    sessions: tuple[SessionView, ...]
    active_index: int = Field(..., ge=0)
    draft: str
    hint: HintState
    composer_height: float = Field(..., gt=0)
    theme: Theme
