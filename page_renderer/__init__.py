"""Page Renderer - cached Jinja2 page/layout rendering with CSRF-aware defaults."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("page-renderer")
except PackageNotFoundError:
    __version__ = "dev"
