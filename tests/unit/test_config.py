"""Unit tests for configuration."""

from unittest.mock import patch

import pytest

from page_renderer.config import PACKAGE_TEMPLATES_DIR, Settings, get_settings
from page_renderer.exceptions import ConfigurationException, ErrorCode
from page_renderer.functions import BASIC_FUNCTIONS
from page_renderer.views.file_sets import BundledFileSet


def test_settings_defaults():
    """Test Settings model has correct defaults."""
    settings = Settings()

    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 8000
    assert settings.production is True
    assert settings.templates_dir == PACKAGE_TEMPLATES_DIR
    assert settings.page_pattern == "*.page.html"
    assert settings.layout_pattern == "*.layout.html"
    assert settings.csrf_cookie_name == "csrf_token"
    assert len(settings.secret_key) >= 16


def test_secret_key_random_per_instance():
    """Test an unset secret key is generated rather than shared."""
    assert Settings().secret_key != Settings().secret_key


def test_settings_env_loading(tmp_path):
    """Test settings can load from environment."""
    with patch.dict(
        "os.environ",
        {
            "API_PORT": "9000",
            "PRODUCTION": "false",
            "TEMPLATES_DIR": str(tmp_path),
            "LOG_LEVEL": "debug",
            "SECRET_KEY": "env-secret-key-value",
        },
    ):
        settings = Settings()

        assert settings.api_port == 9000
        assert settings.production is False
        assert settings.templates_dir == tmp_path
        assert settings.log_level == "DEBUG"
        assert settings.secret_key == "env-secret-key-value"


def test_settings_invalid_log_level():
    """Test unknown log levels are rejected."""
    with pytest.raises(ValueError):
        Settings(log_level="LOUD")


def test_settings_short_secret_rejected():
    """Test a short signing key is rejected."""
    with pytest.raises(ValueError):
        Settings(secret_key="short")


def test_get_settings_singleton():
    """Test get_settings returns singleton instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2


def test_to_view_config(tmp_path):
    """Test the view configuration mirrors the settings."""
    settings = Settings(production=False, templates_dir=tmp_path, page_location="views/pages")

    config = settings.to_view_config()

    assert isinstance(config.file_set, BundledFileSet)
    assert config.source_dir == tmp_path
    assert config.production is False
    assert config.page_glob == "views/pages/*.page.html"
    assert config.funcs == dict(BASIC_FUNCTIONS)


def test_to_view_config_custom_functions():
    """Test custom functions replace the defaults."""
    upper = str.upper

    config = Settings().to_view_config(funcs={"upper": upper})

    assert config.funcs == {"upper": upper}


def test_to_view_config_invalid(tmp_path):
    """Test an invalid view configuration raises ConfigurationException."""
    settings = Settings(production=False, templates_dir=tmp_path / "missing")

    with pytest.raises(ConfigurationException) as exc_info:
        settings.to_view_config()

    assert exc_info.value.code == ErrorCode.CONFIG_INVALID
    assert exc_info.value.details["errors"]
