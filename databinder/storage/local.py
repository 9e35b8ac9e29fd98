"""
Local filesystem source writer.

Writes each generated file in place under a base directory.
"""

from __future__ import annotations

from pathlib import Path

from ..core.logging import get_logger
from .interface import SourceFileWriter

logger = get_logger(__name__)


class DirectoryFileWriter(SourceFileWriter):
    """Directory-backed writer; files are overwritten and deletable."""

    def __init__(self, base_path: Path) -> None:
        """Initialize the writer.

        Args:
            base_path: Root directory canonical names are resolved against
        """
        self.base_path = Path(base_path).absolute()

    def _get_full_path(self, canonical_name: str) -> Path:
        return self.base_path / self.canonical_to_relative(canonical_name)

    def write_to_file(self, canonical_name: str, contents: str) -> None:
        """Write a source file for a canonical name, creating parent folders."""
        self.write_to_path(self._get_full_path(canonical_name), contents)

    def write_to_path(self, exact_path: Path, contents: str) -> None:
        """Write ``contents`` to ``exact_path``, replacing any existing file."""
        exact_path.parent.mkdir(parents=True, exist_ok=True)
        exact_path.write_text(contents, encoding="utf-8")
        logger.debug("Wrote source file", path=str(exact_path))

    def delete(self, canonical_name: str) -> None:
        """Remove the file for a canonical name; missing files are ignored."""
        full_path = self._get_full_path(canonical_name)
        if full_path.exists():
            full_path.unlink()
            logger.debug("Deleted source file", path=str(full_path))
