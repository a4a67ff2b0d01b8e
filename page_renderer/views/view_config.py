"""Configuration record consumed by the cache builder and view manager."""

from collections.abc import Callable
from functools import cached_property
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from page_renderer.functions import BASIC_FUNCTIONS
from page_renderer.views.file_sets import FileSet


def _join_glob(location: str, pattern: str) -> str:
    # Always "/" - bundled file sets never accept platform separators
    return f"{location}/{pattern}" if location else pattern


class ViewConfig(BaseModel):
    """Where pages and layouts live and how they are compiled.

    Immutable after construction. ``file_set`` is the bundled file set used
    in production; ``source_dir`` is the on-disk copy of the same tree that
    development mode re-reads on every render.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    file_set: FileSet = Field(description="Bundled file set used in production")
    source_dir: Path | None = Field(default=None, description="Template root on disk, required in development")
    page_location: str = Field(default="pages", description="Page directory relative to the file set root")
    page_pattern: str = Field(min_length=1, default="*.page.html", description="Glob pattern for page files")
    layout_location: str = Field(default="layouts", description="Layout directory relative to the file set root")
    layout_pattern: str = Field(min_length=1, default="*.layout.html", description="Glob pattern for layout files")
    funcs: dict[str, Callable[..., Any]] = Field(
        default_factory=lambda: dict(BASIC_FUNCTIONS),
        description="Functions bound into every template",
    )
    production: bool = Field(default=True, description="Build once (True) or rebuild from disk per render (False)")

    @field_validator("page_location", "layout_location", mode="after")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        """Trim surrounding slashes so globs stay relative to the file set root."""
        return v.strip().strip("/")

    @model_validator(mode="after")
    def check_development_source(self) -> "ViewConfig":
        """Development mode needs a directory on disk to reload from."""
        if not self.production:
            if self.source_dir is None:
                raise ValueError("source_dir is required when production is False")
            if not self.source_dir.is_dir():
                raise ValueError(f"source_dir {self.source_dir} is not a directory")
        # Derive the glob strings once, up front
        _ = self.page_glob, self.layout_glob
        return self

    @cached_property
    def page_glob(self) -> str:
        """Glob for page files, e.g. ``pages/*.page.html``."""
        return _join_glob(self.page_location, self.page_pattern)

    @cached_property
    def layout_glob(self) -> str:
        """Glob for layout files, e.g. ``layouts/*.layout.html``."""
        return _join_glob(self.layout_location, self.layout_pattern)
