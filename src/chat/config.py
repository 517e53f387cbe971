"""Chat shell configuration with environment variable loading.

Pydantic-based configuration for storage selection and composer timing.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

_DATA_DIR = Path(__file__).parent.parent.parent / "data"

EXPLICIT_HINT_MS = 2000
KEYBOARD_HINT_MS = 5000

StorageBackend = Literal["browser", "file", "memory"]


class ChatConfig(BaseModel):
    """Configuration for the chat shell.

    Attributes:
        storage_backend: Where sessions are kept. "browser" uses NiceGUI's
            per-browser storage, "file" a JSON file, "memory" nothing durable.
        storage_path: JSON file used by the "file" backend.
        explicit_hint_ms: Hint duration after an empty send-button submit.
        keyboard_hint_ms: Hint duration after an empty Enter submit.
        title_max_chars: Characters of the first message shown as title.
    """

    storage_backend: StorageBackend = Field(
        default_factory=lambda: os.getenv("CHAT_STORAGE_BACKEND", "browser").strip().lower(),
        validate_default=True,
        description="Session storage backend",
    )
    storage_path: Path = Field(
        default_factory=lambda: Path(
            os.getenv("CHAT_STORAGE_PATH") or _DATA_DIR / "storage.json"
        ),
        validate_default=True,
        description="JSON file for the file backend",
    )
    explicit_hint_ms: int = Field(
        default=EXPLICIT_HINT_MS,
        ge=1,
        description="Hint duration for the send button",
    )
    keyboard_hint_ms: int = Field(
        default=KEYBOARD_HINT_MS,
        ge=1,
        description="Hint duration for the Enter key",
    )
    title_max_chars: int = Field(
        default=32,
        ge=1,
        description="Title truncation length",
    )

    @field_validator("storage_path")
    @classmethod
    def validate_storage_path(cls, v: Path) -> Path:
        """Reject a storage path that points at a directory."""
        if v.is_dir():
            raise ValueError(f"CHAT_STORAGE_PATH must be a file, got directory {v}")
        return v


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValidationError: If an environment value is invalid.
    """
    return ChatConfig()
