"""
Resource-Processing Pipeline.

Stage 1 of data binding: processes the merged resources of a module and
exports layout-info files for base-class generation.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from ...core.config import Config, get_config
from ...core.exceptions import DataBinderError, PipelineError
from ...core.logging import get_logger
from ...engine import Engine, LayoutXmlProcessor, ResourceInput
from ...models.options import ProcessXmlOptions
from ...storage import DirectoryFileWriter, Workspace, ZipFileWriter, zip_dir
from ..staging import ResourceStager

logger = get_logger(__name__)


class ProcessResourcesOutput(BaseModel):
    """Artifacts produced by a resource-processing run."""

    res_output: Path = Field(description="Processed resources folder or zip")
    layout_info_output: Path = Field(description="Layout-info folder or zip")
    has_bindings: bool = Field(default=False, description="Any layout needs a binding class")


class ProcessResourcesService:
    """Runs the PROCESS_RESOURCES subcommand.

    Each output (processed resources, layout-info) is zipped or not on its
    own flag. Zipped resources are produced in a temporary directory first.
    """

    def __init__(self, engine: Engine, config: Config | None = None) -> None:
        """Initialize the service.

        Args:
            engine: Compiler engine factory
            config: Configuration; defaults to the environment configuration
        """
        self.engine = engine
        self.config = config or get_config()

    def run(self, options: ProcessXmlOptions) -> ProcessResourcesOutput:
        """Process resources and export layout-info as ``options`` request."""
        logger.info("Processing resources", app_id=options.app_id, res_input=str(options.res_input))

        stage = "stage-input"
        try:
            with Workspace(self.config.workspace) as workspace:
                res_input = ResourceStager(workspace, prefix="db-resources-in").stage(
                    [options.res_input]
                )

                stage = "process-resources"
                processor = self.engine.create_processor(
                    options.app_id,
                    options.use_androidx,
                    DirectoryFileWriter(options.res_output),
                )
                if options.zip_res_output:
                    res_output_dir = workspace.temp_dir("db-resources-out")
                else:
                    res_output_dir = options.res_output
                has_bindings = processor.process_resources(
                    ResourceInput(
                        incremental=False,
                        root_in_folder=res_input,
                        root_out_folder=res_output_dir,
                    ),
                    options.enable_view_binding,
                    options.enable_data_binding,
                )

                stage = "write-layout-info"
                layout_info = self._write_layout_info(processor, options)

                if options.zip_res_output:
                    stage = "zip-resources"
                    zip_dir(res_output_dir, options.res_output)
        except DataBinderError:
            raise
        except Exception as e:
            logger.error("Resource processing failed", stage=stage, error=str(e))
            raise PipelineError(message=str(e), stage=stage, cause=e)

        logger.info(
            "Resource processing completed",
            res_output=str(options.res_output),
            layout_info=str(layout_info),
        )
        return ProcessResourcesOutput(
            res_output=options.res_output,
            layout_info_output=layout_info,
            has_bindings=bool(has_bindings),
        )

    def _write_layout_info(self, processor: LayoutXmlProcessor, options: ProcessXmlOptions) -> Path:
        if not options.zip_layout_info:
            processor.write_layout_info_files(options.layout_info_output)
            return options.layout_info_output

        out_dir, zip_file = options.layout_info_target()
        out_dir.mkdir(parents=True, exist_ok=True)
        with ZipFileWriter(zip_file) as writer:
            processor.write_layout_info_files(out_dir, writer)
        logger.debug("Wrote layout-info zip", path=str(zip_file))
        return zip_file
