"""
Configuration management for databinder.

Provides centralized, type-safe configuration with environment variable overrides
and defaults matching the behaviour build systems expect from the tool.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

DEFAULT_ENGINE = "databinder.engine.reference:ReferenceEngine"


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


class WorkspaceConfig(BaseModel):
    """Temporary workspace configuration."""

    keep_temp_dirs: bool = Field(
        default=False,
        description="Leave temporary directories behind for the OS to clean up",
    )
    temp_root: Path | None = Field(
        default=None, description="Parent directory for temporary directories"
    )


class Config(BaseModel):
    """Root configuration for databinder."""

    project_name: str = Field(default="databinder", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    legacy_exit_zero: bool = Field(
        default=False,
        description="Exit 0 even when a pipeline fails (pre-1.0 behaviour)",
    )
    engine: str = Field(
        default=DEFAULT_ENGINE, description="module:attribute path of the engine factory"
    )
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        temp_root = os.environ.get("DATABINDER_TEMP_ROOT")
        return cls(
            log_level=os.environ.get("DATABINDER_LOG_LEVEL", "INFO"),  # type: ignore
            legacy_exit_zero=_env_flag("DATABINDER_LEGACY_EXIT_ZERO", "false"),
            engine=os.environ.get("DATABINDER_ENGINE", DEFAULT_ENGINE),
            workspace=WorkspaceConfig(
                keep_temp_dirs=_env_flag("DATABINDER_KEEP_TEMP", "false"),
                temp_root=Path(temp_root) if temp_root else None,
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
