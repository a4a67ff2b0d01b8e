"""Tests for ViewConfig."""

import pytest
from pydantic import ValidationError

from page_renderer.functions import BASIC_FUNCTIONS
from page_renderer.views.file_sets import BundledFileSet
from page_renderer.views.view_config import ViewConfig


def test_derived_globs(make_config):
    """Test page and layout globs join location and pattern with '/'."""
    config = make_config()

    assert config.page_glob == "pages/*.page.html"
    assert config.layout_glob == "layouts/*.layout.html"


def test_locations_are_trimmed(make_config):
    """Test surrounding slashes in locations are removed."""
    config = make_config(page_location="/views/pages/", layout_location="views/layouts/")

    assert config.page_glob == "views/pages/*.page.html"
    assert config.layout_glob == "views/layouts/*.layout.html"


def test_empty_location_uses_pattern_only(make_config):
    """Test an empty location globs from the file set root."""
    config = make_config(page_location="", layout_location="")

    assert config.page_glob == "*.page.html"
    assert config.layout_glob == "*.layout.html"


def test_default_functions(template_root):
    """Test funcs defaults to the basic functions and production to True."""
    config = ViewConfig(file_set=BundledFileSet(template_root))

    assert config.production is True
    assert config.funcs == dict(BASIC_FUNCTIONS)
    assert config.source_dir is None


def test_empty_pattern_rejected(make_config):
    """Test patterns must not be empty."""
    with pytest.raises(ValidationError):
        make_config(page_pattern="")


def test_file_set_must_implement_protocol(template_root):
    """Test arbitrary objects are rejected as file sets."""
    with pytest.raises(ValidationError):
        ViewConfig(file_set=object())


def test_development_requires_source_dir(template_root):
    """Test development mode without a disk root is rejected."""
    with pytest.raises(ValidationError, match="source_dir is required"):
        ViewConfig(file_set=BundledFileSet(template_root), production=False)


def test_development_requires_existing_directory(template_root, tmp_path):
    """Test development mode with a missing directory is rejected."""
    with pytest.raises(ValidationError, match="is not a directory"):
        ViewConfig(
            file_set=BundledFileSet(template_root),
            source_dir=tmp_path / "missing",
            production=False,
        )


def test_config_is_frozen(make_config):
    """Test the configuration cannot be changed after construction."""
    config = make_config()

    with pytest.raises(ValidationError):
        config.production = False
