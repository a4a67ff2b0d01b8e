"""Tests for structured logging setup."""

import json
import logging

import pytest

from page_renderer.logging_config import get_logger, log_with_context, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_json(tmp_path, restore_root_logger):
    """Test context fields end up in the JSON log file."""
    setup_logging("DEBUG", log_dir=tmp_path)
    logger = get_logger("page_renderer.test")

    log_with_context(logger, "info", "Template cache built", page_count=3, event_type="template_cache_built")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = (tmp_path / "page_renderer.log").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["message"] == "Template cache built"
    assert record["page_count"] == 3
    assert record["event_type"] == "template_cache_built"


def test_setup_logging_console_only(restore_root_logger):
    """Test log_dir=None installs only the console handler."""
    root = setup_logging("WARNING", log_dir=None)

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
