"""
Resource Stager.

Merges one or more inputs (folders or zip files) into a single directory the
compiler engine can read.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

from ...core.exceptions import InvalidArgumentError
from ...core.logging import get_logger
from ...storage import Workspace, unzip

logger = get_logger(__name__)


class ResourceStager:
    """Stages inputs into a workspace-owned directory.

    Zip inputs are extracted; folder inputs are copied. Inputs are applied in
    order, so a later input wins when two provide the same relative path. A
    single folder input is handed back as-is without copying.
    """

    def __init__(self, workspace: Workspace, prefix: str = "db-class-info") -> None:
        """Initialize the stager.

        Args:
            workspace: Owner of the staging directory
            prefix: Name prefix for the staging directory
        """
        self.workspace = workspace
        self.prefix = prefix

    def stage(self, inputs: Sequence[Path]) -> Path:
        """Produce one directory holding the union of ``inputs``.

        Raises:
            InvalidArgumentError: If an input is neither a file nor a folder.
        """
        paths = [Path(p).absolute() for p in inputs]
        if not paths:
            raise InvalidArgumentError(message="No input to stage", path="", exists=False)

        for path in paths:
            if not path.is_file() and not path.is_dir():
                raise InvalidArgumentError(
                    message=f"{path} should've been a zip file or a folder. It is not.",
                    path=str(path),
                    exists=path.exists(),
                )

        if len(paths) == 1 and paths[0].is_dir():
            logger.debug("Using input folder in place", path=str(paths[0]))
            return paths[0]

        out_folder = self.workspace.temp_dir(self.prefix)
        for path in paths:
            if path.is_file():
                unzip(path, out_folder)
            else:
                shutil.copytree(path, out_folder, dirs_exist_ok=True)

        logger.debug("Staged inputs", inputs=[str(p) for p in paths], staging=str(out_folder))
        return out_folder
