"""Core infrastructure components for databinder."""

from .config import Config, get_config
from .exceptions import (
    ArchiveError,
    DataBinderError,
    EngineError,
    InvalidArgumentError,
    PipelineError,
    UnsupportedOperationError,
)
from .logging import get_logger, setup_logging
from .types import DispatchResult, ErrorKind, Subcommand

__all__ = [
    "Config",
    "get_config",
    "ArchiveError",
    "DataBinderError",
    "EngineError",
    "InvalidArgumentError",
    "PipelineError",
    "UnsupportedOperationError",
    "get_logger",
    "setup_logging",
    "DispatchResult",
    "ErrorKind",
    "Subcommand",
]
