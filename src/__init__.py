"""Thespis - single-page chat client shell.

Keeps multiple local chat sessions, an auto-growing composer and an
empty-input hint, rendered with NiceGUI on a FastAPI host.

Components:
    - storage: Browser-style key-value persistence
    - chat: Session repository, composer controller and the shell facade
    - models: Pydantic models for persisted data and view state
    - ui: NiceGUI page bound to the shell
    - api: FastAPI host with health check
"""

__version__ = "0.1.0"
