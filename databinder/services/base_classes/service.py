"""
Base-Class-Generation Pipeline.

Stage 2 of data binding. Runs after layout-info has been exported and
before javac, because it generates sources for javac.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from ...core.config import Config, get_config
from ...core.exceptions import DataBinderError, PipelineError
from ...core.logging import get_logger
from ...engine import Engine, LayoutInfoArgs
from ...models.options import GenerateBaseClassesOptions
from ...storage import DirectoryFileWriter, SourceFileWriter, Workspace, ZipFileWriter, zip_dir
from ..staging import ResourceStager

logger = get_logger(__name__)


class GenerateBaseClassesOutput(BaseModel):
    """Artifacts produced by a base-class generation run."""

    source_output: Path = Field(description="Generated sources folder or zip")
    class_info_output: Path = Field(description="Class-info zip")


class GenerateBaseClassesService:
    """Runs the GEN_BASE_CLASSES subcommand.

    Generated sources go to a folder or a zip depending on the options;
    class-info is always exported as a zip.
    """

    def __init__(self, engine: Engine, config: Config | None = None) -> None:
        """Initialize the service.

        Args:
            engine: Compiler engine factory
            config: Configuration; defaults to the environment configuration
        """
        self.engine = engine
        self.config = config or get_config()

    def run(self, options: GenerateBaseClassesOptions) -> GenerateBaseClassesOutput:
        """Generate base classes and class-info for one module."""
        logger.info(
            "Generating base classes",
            package=options.package_name,
            layout_info=str(options.layout_info_folder),
        )

        stage = "stage-input"
        try:
            with Workspace(self.config.workspace) as workspace:
                layout_info_folder = ResourceStager(workspace, prefix="db-class-info").stage(
                    [options.layout_info_folder]
                )
                class_info_out_folder = workspace.temp_dir("db-class-info-out")
                args = LayoutInfoArgs(
                    out_of_date=(),
                    removed=(),
                    info_folder=layout_info_folder,
                    dependency_classes_folders=options.dependency_class_info_folders,
                    artifact_folder=class_info_out_folder,
                    package_name=options.package_name,
                    log_folder=workspace.temp_dir("db-incremental-log"),
                    incremental=False,
                    use_androidx=options.use_androidx,
                    enable_view_binding=options.enable_view_binding,
                    enable_data_binding=options.enable_data_binding,
                )

                stage = "generate"
                writer = self._create_writer(options)
                try:
                    self.engine.create_generator().generate_all(args, writer)
                finally:
                    if isinstance(writer, ZipFileWriter):
                        writer.close()

                # Class-info is always zipped; dependants consume a single file
                stage = "zip-class-info"
                zip_dir(class_info_out_folder, options.class_info_out)
        except DataBinderError:
            raise
        except Exception as e:
            logger.error("Base class generation failed", stage=stage, error=str(e))
            raise PipelineError(message=str(e), stage=stage, cause=e)

        logger.info(
            "Base class generation completed",
            source_output=str(options.source_file_out),
            class_info=str(options.class_info_out),
        )
        return GenerateBaseClassesOutput(
            source_output=options.source_file_out,
            class_info_output=options.class_info_out,
        )

    def _create_writer(self, options: GenerateBaseClassesOptions) -> SourceFileWriter:
        if options.zip_source_output:
            options.source_file_out.parent.mkdir(parents=True, exist_ok=True)
            return ZipFileWriter(options.source_file_out)
        options.source_file_out.mkdir(parents=True, exist_ok=True)
        return DirectoryFileWriter(options.source_file_out)
