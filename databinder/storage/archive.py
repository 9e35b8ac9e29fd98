"""
Zip archive source writer.

Buffers every generated file into a single output archive. The archive must
be closed once all writes are done; use the writer as a context manager.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from types import TracebackType

from ..core.exceptions import UnsupportedOperationError
from ..core.logging import get_logger
from .interface import SourceFileWriter

logger = get_logger(__name__)


class ZipFileWriter(SourceFileWriter):
    """Archive-backed writer.

    Entry write failures are logged and skipped so the remaining files still
    land in the archive. Deleting is not possible once an entry is written.
    """

    def __init__(self, out_zip_file: Path) -> None:
        """Open ``out_zip_file`` for writing, truncating any existing file.

        Args:
            out_zip_file: Archive to create. Its parent directory must exist.
        """
        self.out_zip_file = Path(out_zip_file)
        self._zip = zipfile.ZipFile(self.out_zip_file, "w", zipfile.ZIP_DEFLATED)

    def write_to_file(self, canonical_name: str, contents: str) -> None:
        """Add an entry at ``<dots as slashes>.java``."""
        self._do_write(str(self.canonical_to_relative(canonical_name)), contents)

    def write_to_path(self, exact_path: Path, contents: str) -> None:
        """Add an entry named after the file's base name only."""
        self._do_write(Path(exact_path).name, contents)

    def delete(self, canonical_name: str) -> None:
        raise UnsupportedOperationError(
            message=f"Cannot delete {canonical_name} from {self.out_zip_file}",
            operation="delete",
        )

    def _do_write(self, entry_path: str, contents: str) -> None:
        try:
            self._zip.writestr(entry_path, contents.encode("utf-8"))
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            logger.error(
                "Cannot write zip entry",
                entry=entry_path,
                archive=str(self.out_zip_file),
                error=str(e),
            )

    def close(self) -> None:
        """Finalize the archive's central directory."""
        self._zip.close()
        logger.debug("Closed zip writer", archive=str(self.out_zip_file))

    def __enter__(self) -> ZipFileWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
