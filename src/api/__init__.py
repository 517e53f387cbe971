"""FastAPI host for the chat page.

Endpoints:
    - GET /health: Service health status
    - GET /: Chat page (NiceGUI, mounted at startup)
"""

from src.api.app import create_app

__all__ = ["create_app"]
