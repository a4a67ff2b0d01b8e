"""File sets the template cache is built from.

Both implementations return forward-slash relative paths, sorted by full
path, so the cache builder never sees platform separators and always
visits pages in the same order.
"""

from importlib.resources import as_file, files
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

from page_renderer.exceptions import TemplateDiscoveryException


@runtime_checkable
class FileSet(Protocol):
    """Read-only source of template files."""

    def glob(self, pattern: str) -> list[str]:
        """Return relative paths of files matching ``pattern``."""
        ...

    def read_text(self, path: str) -> str:
        """Return the UTF-8 content of a file returned by ``glob``."""
        ...


def _split_pattern(pattern: str) -> tuple[str, ...]:
    """Validate a glob pattern and split it into path segments."""
    pure = PurePosixPath(pattern)
    if not pattern or pure.is_absolute() or pure.parts in ((), (".",)):
        raise TemplateDiscoveryException(
            f"invalid glob pattern: {pattern!r}",
            details={"pattern": pattern},
        )
    return pure.parts


def _glob_under(root: Path, pattern: str) -> list[str]:
    """Glob ``pattern`` below ``root`` and return sorted '/'-joined relative paths."""
    _split_pattern(pattern)
    try:
        paths = [path for path in root.glob(pattern) if path.is_file()]
    except (OSError, ValueError, NotImplementedError) as e:
        raise TemplateDiscoveryException(
            f"unable to glob {pattern!r} under {root}: {e}",
            details={"pattern": pattern, "root": str(root)},
        ) from e
    return sorted(path.relative_to(root).as_posix() for path in paths)


class BundledFileSet:
    """Templates shipped as package data (read-only, fixed at build time)."""

    def __init__(self, root: Traversable):
        self._root = root

    @classmethod
    def from_package(cls, package: str, subdirectory: str = "") -> "BundledFileSet":
        """Create a file set rooted at ``subdirectory`` inside ``package``."""
        root = files(package)
        for part in PurePosixPath(subdirectory).parts:
            root = root / part
        return cls(root)

    def glob(self, pattern: str) -> list[str]:
        if not self._root.is_dir():
            _split_pattern(pattern)
            return []
        # Zipped packages are extracted to a temporary directory for the listing
        with as_file(self._root) as root:
            return _glob_under(root, pattern)

    def read_text(self, path: str) -> str:
        node = self._root
        for part in PurePosixPath(path).parts:
            node = node / part
        return node.read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"BundledFileSet({self._root!r})"


class DiskFileSet:
    """Templates read live from a directory on disk."""

    def __init__(self, root: Path | str):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def glob(self, pattern: str) -> list[str]:
        return _glob_under(self._root, pattern)

    def read_text(self, path: str) -> str:
        return (self._root / path).read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"DiskFileSet({str(self._root)!r})"
