import secrets
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from page_renderer.exceptions import ConfigurationException, ErrorCode
from page_renderer.functions import BASIC_FUNCTIONS, TemplateFunctions
from page_renderer.logging_config import get_logger, log_with_context
from page_renderer.views.file_sets import BundledFileSet
from page_renderer.views.view_config import ViewConfig

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # page-renderer/
PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent / "web"


class Settings(BaseSettings):
    """Host application settings with validation.

    Values come from environment variables or the ``.env`` file. In
    production the bundled ``page_renderer/web`` templates are used; with
    ``production=false`` templates are re-read from ``templates_dir`` on
    every render.
    """

    # API server settings
    api_host: str = Field(min_length=1, default="127.0.0.1", description="Server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Root log level")

    # View settings
    production: bool = Field(default=True, description="Cache templates once instead of reloading per render")
    templates_dir: Path = Field(default=PACKAGE_TEMPLATES_DIR, description="Template root on disk for development")
    page_location: str = Field(default="pages", description="Page directory under the template root")
    page_pattern: str = Field(min_length=1, default="*.page.html", description="Page glob pattern")
    layout_location: str = Field(default="layouts", description="Layout directory under the template root")
    layout_pattern: str = Field(min_length=1, default="*.layout.html", description="Layout glob pattern")

    # CSRF settings
    secret_key: str = Field(
        default_factory=lambda: secrets.token_hex(32),
        min_length=16,
        description="Key used to sign CSRF cookies (random per process when unset)",
    )
    csrf_cookie_name: str = Field(min_length=1, default="csrf_token", description="Name of the CSRF cookie")
    csrf_cookie_secure: bool = Field(default=True, description="Send the CSRF cookie over HTTPS only")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level is a standard level name."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v

    def to_view_config(self, funcs: TemplateFunctions | None = None) -> ViewConfig:
        """Build the view configuration for these settings.

        Args:
            funcs: Template functions, defaults to BASIC_FUNCTIONS

        Returns:
            ViewConfig bound to the bundled templates and ``templates_dir``

        Raises:
            ConfigurationException: If the view configuration is invalid
        """
        try:
            return ViewConfig(
                file_set=BundledFileSet.from_package("page_renderer", "web"),
                source_dir=self.templates_dir,
                page_location=self.page_location,
                page_pattern=self.page_pattern,
                layout_location=self.layout_location,
                layout_pattern=self.layout_pattern,
                funcs=dict(funcs if funcs is not None else BASIC_FUNCTIONS),
                production=self.production,
            )
        except ValidationError as e:
            log_with_context(
                logger,
                "error",
                "Invalid view configuration",
                error=str(e),
                event_type="config_invalid",
            )
            raise ConfigurationException(
                "invalid view configuration",
                code=ErrorCode.CONFIG_INVALID,
                details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
            ) from e


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
