"""Main FastAPI application entry point."""

import os
from pathlib import Path

from dotenv import load_dotenv

from page_renderer.core.app_factory import create_app
from page_renderer.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
setup_logging(os.getenv("LOG_LEVEL", "INFO"))

app = create_app()


if __name__ == "__main__":
    import uvicorn

    from page_renderer.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "page_renderer.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=not settings.production,
    )
