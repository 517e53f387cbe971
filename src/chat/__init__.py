"""Chat core: session state and composer input.

Responsibilities:
    - Ordered session list with persistence and safe index handling
    - Draft text, auto-grow height and the empty-input hint timer
    - A single shell object the view renders and forwards events to
    - Configuration from environment

Contains no presentation code. The NiceGUI page in src.ui is a thin binding.
"""

from src.chat.composer import ComposerController, LineMetrics, clamp_height
from src.chat.config import ChatConfig, get_chat_config
from src.chat.repository import SessionRepository
from src.chat.shell import ChatShell, create_chat_shell
from src.chat.timing import AsyncioScheduler, Scheduler

__all__ = [
    "AsyncioScheduler",
    "ChatConfig",
    "ChatShell",
    "ComposerController",
    "LineMetrics",
    "Scheduler",
    "SessionRepository",
    "clamp_height",
    "create_chat_shell",
    "get_chat_config",
]
