"""
Zip archive codec.

Unzips an archive into a directory and zips a directory into an archive.
"""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path

from ..core.exceptions import ArchiveError
from ..core.logging import get_logger

logger = get_logger(__name__)


def unzip(archive: Path, dest_dir: Path) -> list[Path]:
    """Extract ``archive`` into ``dest_dir``.

    Entries overwrite files already present at the same relative path.

    Args:
        archive: Zip file to extract.
        dest_dir: Destination directory, created if missing.

    Returns:
        The extracted file paths, in archive order.

    Raises:
        ArchiveError: If the file is not a zip or an entry escapes dest_dir.
    """
    dest_dir = Path(dest_dir).resolve()
    dest_dir.mkdir(parents=True, exist_ok=True)
    extracted: list[Path] = []

    try:
        with zipfile.ZipFile(archive, "r") as zf:
            for info in zf.infolist():
                target = (dest_dir / info.filename).resolve()
                try:
                    target.relative_to(dest_dir)
                except ValueError:
                    raise ArchiveError(
                        message=f"Entry escapes the destination directory: {info.filename}",
                        archive_path=str(archive),
                    )

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)
                extracted.append(target)
    except zipfile.BadZipFile as e:
        raise ArchiveError(
            message="Not a valid zip archive",
            archive_path=str(archive),
            cause=e,
        )

    logger.debug("Unzipped archive", archive=str(archive), dest=str(dest_dir), files=len(extracted))
    return extracted


def zip_dir(source_dir: Path, archive: Path) -> Path:
    """Compress every file under ``source_dir`` into ``archive``.

    Entry names are relative to ``source_dir`` with forward slashes and are
    added in sorted order so identical trees give identical archives.

    Args:
        source_dir: Directory to compress.
        archive: Zip file to create; its parent directory is created.

    Returns:
        The archive path.
    """
    source_dir = Path(source_dir)
    archive = Path(archive)
    archive.parent.mkdir(parents=True, exist_ok=True)

    files = sorted(p for p in source_dir.rglob("*") if p.is_file())
    with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as zf:
        for path in files:
            zf.write(path, path.relative_to(source_dir).as_posix())

    logger.debug("Zipped directory", source=str(source_dir), archive=str(archive), files=len(files))
    return archive
