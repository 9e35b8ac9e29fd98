"""
Compiler engine interface.

The pipelines only sequence calls into these collaborators; parsing layout
XML and producing source text happen behind this boundary.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..storage import SourceFileWriter


class ResourceInput(BaseModel):
    """Where the layout processor reads resources from and writes them to."""

    model_config = ConfigDict(frozen=True)

    incremental: bool = Field(default=False)
    root_in_folder: Path = Field(description="Merged resources root")
    root_out_folder: Path = Field(description="Processed resources root")


class LayoutInfoArgs(BaseModel):
    """Invocation descriptor for base-class generation."""

    model_config = ConfigDict(frozen=True)

    out_of_date: tuple[Path, ...] = Field(default=())
    removed: tuple[Path, ...] = Field(default=())
    info_folder: Path = Field(description="Staged layout-info files")
    dependency_classes_folders: tuple[Path, ...] = Field(default=())
    artifact_folder: Path = Field(description="Class-info output folder")
    package_name: str
    log_folder: Path = Field(description="Incremental build log folder")
    incremental: bool = Field(default=False)
    use_androidx: bool = Field(default=True)
    enable_view_binding: bool = Field(default=True)
    enable_data_binding: bool = Field(default=True)


class LayoutXmlProcessor(ABC):
    """Processes layout XML resources and records layout-info."""

    @abstractmethod
    def process_resources(
        self,
        resource_input: ResourceInput,
        enable_view_binding: bool,
        enable_data_binding: bool,
    ) -> bool:
        """Process every resource under the input root into the output root.

        Returns:
            True if any layout needed binding support
        """
        ...

    @abstractmethod
    def write_layout_info_files(self, out_dir: Path, writer: SourceFileWriter | None = None) -> None:
        """Emit layout-info files into ``out_dir``.

        Files go through ``writer`` when given, otherwise through the writer the
        processor was created with.
        """
        ...


class BaseClassGenerator(ABC):
    """Generates binding base classes and the class-info artifact."""

    @abstractmethod
    def generate_all(self, args: LayoutInfoArgs, writer: SourceFileWriter) -> None:
        """Write generated sources through ``writer`` and class-info into
        ``args.artifact_folder``."""
        ...


class Engine(ABC):
    """Factory for the engine's entry points."""

    NAME = "engine"

    @abstractmethod
    def create_processor(
        self,
        app_id: str,
        use_androidx: bool,
        file_writer: SourceFileWriter,
    ) -> LayoutXmlProcessor:
        """Create a layout processor for one module.

        Args:
            app_id: Package the module's R class lives in
            use_androidx: Whether generated code targets androidX packages
            file_writer: Default destination for layout-info files
        """
        ...

    @abstractmethod
    def create_generator(self) -> BaseClassGenerator:
        """Create a base-class generator."""
        ...
