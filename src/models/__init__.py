"""Pydantic models shared by the chat core and the view.

Provides validation of persisted data and typed snapshots for rendering.

Models:
    - Session: One chat session and its messages
    - HintState: Empty-input hint visibility and deadline
    - SessionView: Session with its derived title
    - ShellState: Full read state handed to the view
    - TriggerSource / Theme: Enumerations used by shell events
"""

from src.models.schemas import (
    HIDDEN_HINT,
    NEW_CHAT_TITLE,
    SESSION_LIST_ADAPTER,
    HintState,
    Session,
    SessionView,
    ShellState,
    Theme,
    TriggerSource,
    session_title,
)

__all__ = [
    "HIDDEN_HINT",
    "NEW_CHAT_TITLE",
    "SESSION_LIST_ADAPTER",
    "HintState",
    "Session",
    "SessionView",
    "ShellState",
    "Theme",
    "TriggerSource",
    "session_title",
]
