"""FastAPI application factory and configuration.

Hosts the chat page: NiceGUI is mounted onto this app in ``src.main``.
The only API route is the health check.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Thespis chat shell...")
    yield
    logger.info("Shutting down Thespis chat shell...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Thespis",
        description=(
            "Single-page chat client shell with multiple local chat sessions, "
            "an auto-growing composer and browser-local persistence."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "thespis"}

    return application
