"""Unit tests for the application entry point."""

import importlib
import sys
from unittest.mock import patch

from fastapi import FastAPI

from page_renderer.exceptions import ViewException


def test_main_creates_app():
    """Test importing main configures logging and builds the app."""
    sys.modules.pop("page_renderer.main", None)
    with patch("page_renderer.logging_config.setup_logging") as mock_setup:
        main = importlib.import_module("page_renderer.main")

    mock_setup.assert_called_once()
    assert isinstance(main.app, FastAPI)
    assert ViewException in main.app.exception_handlers
    assert main.app.url_path_for("home") == "/"
    assert main.app.url_path_for("page", page="about") == "/pages/about"
    assert main.app.url_path_for("health_check") == "/health"
