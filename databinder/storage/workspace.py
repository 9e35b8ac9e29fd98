"""
Temporary workspace for one pipeline run.

Every temporary directory a pipeline needs is allocated here and released
when the run ends, unless the configuration asks to keep them.
"""

from __future__ import annotations

import shutil
import tempfile
from contextlib import ExitStack
from pathlib import Path
from types import TracebackType

from ..core.config import WorkspaceConfig
from ..core.logging import get_logger

logger = get_logger(__name__)


class Workspace:
    """Scoped owner of a pipeline run's temporary directories."""

    def __init__(self, config: WorkspaceConfig | None = None) -> None:
        self.config = config or WorkspaceConfig()
        self._stack = ExitStack()
        self.directories: list[Path] = []

    def temp_dir(self, prefix: str) -> Path:
        """Create a fresh empty directory named after ``prefix``."""
        root = self.config.temp_root
        if root is not None:
            root.mkdir(parents=True, exist_ok=True)
        path = Path(tempfile.mkdtemp(prefix=f"{prefix}-", dir=root))
        self.directories.append(path)
        if not self.config.keep_temp_dirs:
            self._stack.callback(shutil.rmtree, path, ignore_errors=True)
        logger.debug("Allocated temp directory", path=str(path))
        return path

    def close(self) -> None:
        """Remove the directories allocated so far."""
        self._stack.close()

    def __enter__(self) -> Workspace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
