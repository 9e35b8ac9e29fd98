"""
Structured logging for databinder.

Build systems capture stdout, so every diagnostic goes to stderr: rich console
output on a terminal, one JSON object per line otherwise.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config


def program_name_adder(name: str) -> structlog.types.Processor:
    """Build a processor tagging each event with ``name`` so build logs can be filtered."""

    def add_program_name(
        logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("program", name)
        return event_dict

    return add_program_name


def render_paths(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Render path values as plain strings."""
    for key, value in event_dict.items():
        if isinstance(value, PurePath):
            event_dict[key] = str(value)
    return event_dict


def _renderer(interactive: bool) -> list[structlog.types.Processor]:
    if interactive:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def setup_logging(config: Config | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        config: Optional configuration. If None, uses INFO level.
    """
    log_level = config.log_level if config else "INFO"
    project_name = config.project_name if config else "databinder"
    level = getattr(logging, log_level, logging.INFO)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=log_level == "DEBUG",
    )
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        program_name_adder(project_name),
        render_paths,
        structlog.processors.add_log_level,
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    structlog.configure(
        processors=processors + _renderer(sys.stderr.isatty()),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Attach ``kwargs`` (e.g. the running subcommand) to later log entries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
