"""Application lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from page_renderer import __version__
from page_renderer.config import Settings
from page_renderer.logging_config import get_logger, log_with_context
from page_renderer.views.view_manager import ViewManager

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the view manager on startup.

    A template cache that fails to build aborts startup; the error is
    logged and re-raised.
    """
    settings: Settings = app.state.settings
    log_with_context(
        logger,
        "info",
        "Starting Page Renderer application",
        version=__version__,
        production=settings.production,
        event_type="app_startup",
    )

    try:
        app.state.view_manager = ViewManager(settings.to_view_config())
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Unable to build template cache",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_startup_failed",
        )
        raise

    try:
        yield
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Page Renderer application",
            event_type="app_shutdown",
        )
        app.state.view_manager = None
