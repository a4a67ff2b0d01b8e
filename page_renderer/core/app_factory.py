"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from page_renderer import __version__
from page_renderer.config import Settings, get_settings
from page_renderer.core.lifespan import lifespan
from page_renderer.core.middleware import setup_middleware
from page_renderer.middleware.error_handlers import register_error_handlers
from page_renderer.routers import health_router, page_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use, defaults to the process-wide instance

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Page Renderer",
        description="Server-rendered pages from cached Jinja2 page and layout templates.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_middleware(app, settings)
    register_error_handlers(app)

    app.include_router(page_router.router, tags=["pages"])
    app.include_router(health_router.router, tags=["health"])

    return app
