"""
Source file writer interface.

Defines the contract the compiler engine writes generated files through, so
that the same engine call can target a directory or a single zip archive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

SOURCE_EXTENSION = ".java"


class SourceFileWriter(ABC):
    """Abstract destination for generated files.

    A ``str`` name is a canonical dotted class name; a ``Path`` is an exact
    file location.
    """

    def write(self, name: str | Path, contents: str) -> None:
        """Write ``contents`` under a canonical name or to an exact path."""
        if isinstance(name, Path):
            self.write_to_path(name, contents)
        else:
            self.write_to_file(name, contents)

    @abstractmethod
    def write_to_file(self, canonical_name: str, contents: str) -> None:
        """Write a file keyed by a dotted canonical name."""
        ...

    @abstractmethod
    def write_to_path(self, exact_path: Path, contents: str) -> None:
        """Write a file at an exact path."""
        ...

    @abstractmethod
    def delete(self, canonical_name: str) -> None:
        """Delete the file written for a canonical name."""
        ...

    @staticmethod
    def canonical_to_relative(canonical_name: str) -> PurePosixPath:
        """Map ``com.example.Foo`` to ``com/example/Foo.java``."""
        return PurePosixPath(canonical_name.replace(".", "/") + SOURCE_EXTENSION)
