"""Middleware configuration."""

from fastapi import FastAPI

from page_renderer.config import Settings
from page_renderer.logging_config import get_logger, log_with_context
from page_renderer.security import CSRFMiddleware

logger = get_logger(__name__)


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    log_with_context(
        logger,
        "info",
        "Configuring CSRF middleware",
        cookie_name=settings.csrf_cookie_name,
        secure_cookie=settings.csrf_cookie_secure,
        event_type="security_config",
    )
    app.add_middleware(CSRFMiddleware, settings=settings)
