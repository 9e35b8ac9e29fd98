"""
Custom exception hierarchy for databinder.

All exceptions inherit from DataBinderError so the dispatcher can map any
failure to an error kind and a process exit code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DataBinderError(Exception):
    """Base exception for all databinder errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class InvalidArgumentError(DataBinderError, ValueError):
    """Raised when an input path is missing or of the wrong kind."""

    path: str = ""
    exists: bool = False

    def __str__(self) -> str:
        return f"{self.message} (path: {self.path}, exists: {self.exists})"


@dataclass
class UnsupportedOperationError(DataBinderError, NotImplementedError):
    """Raised when a writer is asked for an operation it cannot perform."""

    operation: str = ""

    def __str__(self) -> str:
        return f"Unsupported operation '{self.operation}': {self.message}"


@dataclass
class ArchiveError(DataBinderError):
    """Raised when an archive cannot be read or written."""

    archive_path: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[{self.archive_path}] {base}" if self.archive_path else base


@dataclass
class EngineError(DataBinderError):
    """Raised when the compiler engine cannot be loaded or fails."""

    engine: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[engine: {self.engine}] {base}"


@dataclass
class PipelineError(DataBinderError):
    """Raised when a pipeline stage fails unexpectedly."""

    stage: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Pipeline error at stage '{self.stage}': {base}"
