"""
Core type definitions for databinder.

Provides the subcommand selector and the result type the dispatcher returns,
so that every outcome maps deterministically to a process exit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Subcommand(str, Enum):
    """Subcommands selectable by the first command-line token."""

    PROCESS_RESOURCES = "PROCESS_RESOURCES"
    GEN_BASE_CLASSES = "GEN_BASE_CLASSES"

    @classmethod
    def parse(cls, token: str) -> Subcommand | None:
        """Return the matching subcommand, or None for an unknown token."""
        try:
            return cls(token)
        except ValueError:
            return None


class ErrorKind(str, Enum):
    """Outcome categories of a dispatch."""

    NONE = "none"
    USAGE = "usage"
    FLAG_PARSING = "flag_parsing"
    INVALID_ARGUMENT = "invalid_argument"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    IO_FAILURE = "io_failure"
    ENGINE = "engine"
    INTERNAL = "internal"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.NONE: 0,
    ErrorKind.USAGE: 1,
    ErrorKind.FLAG_PARSING: 2,
    ErrorKind.INVALID_ARGUMENT: 3,
    ErrorKind.UNSUPPORTED_OPERATION: 4,
    ErrorKind.IO_FAILURE: 5,
    ErrorKind.ENGINE: 6,
    ErrorKind.INTERNAL: 70,
}


@dataclass
class DispatchResult:
    """Result of dispatching one command line.

    Carries the selected subcommand (if any), the error kind and the
    diagnostic. ``legacy_exit_zero`` reproduces the historical behaviour of
    exiting 0 after a pipeline failure.
    """

    subcommand: Subcommand | None = None
    error_kind: ErrorKind = ErrorKind.NONE
    error: str | None = None
    legacy_exit_zero: bool = False

    @property
    def success(self) -> bool:
        return self.error_kind is ErrorKind.NONE

    @property
    def exit_code(self) -> int:
        if self.legacy_exit_zero and self.error_kind not in (
            ErrorKind.USAGE,
            ErrorKind.FLAG_PARSING,
        ):
            return 0
        return self.error_kind.exit_code

    @classmethod
    def ok(cls, subcommand: Subcommand) -> DispatchResult:
        """Create a successful result."""
        return cls(subcommand=subcommand)

    @classmethod
    def fail(
        cls,
        kind: ErrorKind,
        error: str,
        subcommand: Subcommand | None = None,
        legacy_exit_zero: bool = False,
    ) -> DispatchResult:
        """Create a failed result."""
        return cls(
            subcommand=subcommand,
            error_kind=kind,
            error=error,
            legacy_exit_zero=legacy_exit_zero,
        )
