"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from page_renderer.config import Settings
from page_renderer.core.app_factory import create_app
from page_renderer.views.file_sets import BundledFileSet
from page_renderer.views.view_config import ViewConfig

BASE_LAYOUT = """<html><head><meta name="csrf-token" content="{{ csrf_token }}"></head>
<body>{% block content %}{% endblock %}</body></html>
"""

HOME_PAGE = """{% extends "base.layout.html" %}
{% block content %}<h1>{{ title }}</h1>{% endblock %}
"""


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def write_template():
    """Write a template file below a root directory, creating parents."""
    return _write


@pytest.fixture
def csrf_token():
    """Fixed anti-forgery token."""
    return "test-csrf-token-0123456789abcdefghijklmnop"


@pytest.fixture
def token_provider(csrf_token):
    """Token provider that ignores the request and returns ``csrf_token``."""
    return lambda request: csrf_token


@pytest.fixture
def template_root(tmp_path):
    """Template tree with one page and one layout."""
    root = tmp_path / "web"
    _write(root, "pages/home.page.html", HOME_PAGE)
    _write(root, "layouts/base.layout.html", BASE_LAYOUT)
    return root


@pytest.fixture
def make_config(template_root):
    """Factory for ViewConfig bound to ``template_root``."""

    def _make(**overrides) -> ViewConfig:
        values = {
            "file_set": BundledFileSet(template_root),
            "source_dir": template_root,
            "page_location": "pages",
            "page_pattern": "*.page.html",
            "layout_location": "layouts",
            "layout_pattern": "*.layout.html",
        }
        values.update(overrides)
        return ViewConfig(**values)

    return _make


@pytest.fixture
def test_settings(template_root):
    """Settings with a fixed signing key and plain-HTTP cookies."""
    return Settings(
        production=True,
        templates_dir=template_root,
        secret_key="test-secret-key-for-csrf-signing",
        csrf_cookie_secure=False,
    )


@pytest.fixture
def test_client(test_settings):
    """FastAPI test client (bundled templates) with lifespan context."""
    with TestClient(create_app(test_settings)) as client:
        yield client
