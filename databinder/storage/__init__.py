"""Output destinations and archive handling for databinder."""

from .archive import ZipFileWriter
from .codec import unzip, zip_dir
from .interface import SOURCE_EXTENSION, SourceFileWriter
from .local import DirectoryFileWriter
from .workspace import Workspace

__all__ = [
    "SOURCE_EXTENSION",
    "SourceFileWriter",
    "DirectoryFileWriter",
    "ZipFileWriter",
    "Workspace",
    "unzip",
    "zip_dir",
]
