"""
Pipeline option models.

One immutable value object per subcommand, built once from the parsed command
line. Paths are absolute by the time a pipeline sees them.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

ZIP_EXTENSION = ".zip"
DEFAULT_LAYOUT_INFO_ZIP = "layout-info.zip"


def _absolute(path: Path) -> Path:
    return Path(path).expanduser().absolute()


class ProcessXmlOptions(BaseModel):
    """Options for the PROCESS_RESOURCES subcommand."""

    model_config = ConfigDict(frozen=True)

    app_id: str = Field(description="Application package; the same package the R file uses")
    res_input: Path = Field(description="Merged resources folder or zip of it")
    res_output: Path = Field(description="Output zip file or folder for processed resources")
    layout_info_output: Path = Field(
        description="Folder (or .zip path) receiving the layout-info files"
    )
    zip_layout_info: bool = Field(default=True, description="Zip the layout-info files into one")
    zip_res_output: bool = Field(default=True, description="Zip the processed resources into one")
    enable_view_binding: bool = Field(default=True)
    enable_data_binding: bool = Field(default=True)
    use_androidx: bool = Field(default=False, description="Generate code against androidX packages")

    @field_validator("res_input", "res_output", "layout_info_output")
    @classmethod
    def _make_absolute(cls, value: Path) -> Path:
        return _absolute(value)

    @property
    def layout_info_is_zip_path(self) -> bool:
        """Whether the layout-info output names the archive file itself."""
        return str(self.layout_info_output).lower().endswith(ZIP_EXTENSION)

    def layout_info_target(self) -> tuple[Path, Path]:
        """Return ``(staging directory, archive file)`` for zipped layout-info.

        A path ending in ``.zip`` is the archive itself and its parent is the
        directory; any other path is a directory holding ``layout-info.zip``.
        """
        if self.layout_info_is_zip_path:
            return self.layout_info_output.parent, self.layout_info_output
        return self.layout_info_output, self.layout_info_output / DEFAULT_LAYOUT_INFO_ZIP


class GenerateBaseClassesOptions(BaseModel):
    """Options for the GEN_BASE_CLASSES subcommand.

    Mirrors what the Gradle plugin's base-class generation task receives:
    layout-info from this module, class-info exported by dependencies, and
    the destinations for generated sources and this module's class-info.
    """

    model_config = ConfigDict(frozen=True)

    layout_info_folder: Path = Field(description="Zip file or folder with the layout-info files")
    dependency_class_info_folders: tuple[Path, ...] = Field(
        default=(),
        description="Class-info folders exported by this task for dependency modules",
    )
    package_name: str = Field(description="Module package; the same package the R file uses")
    class_info_out: Path = Field(description="Zip file receiving this module's class-info")
    source_file_out: Path = Field(description="Folder or zip file receiving generated sources")
    zip_source_output: bool = Field(default=False)
    use_androidx: bool = Field(default=True)
    enable_view_binding: bool = Field(default=True)
    enable_data_binding: bool = Field(default=True)

    @field_validator("layout_info_folder", "class_info_out", "source_file_out")
    @classmethod
    def _make_absolute(cls, value: Path) -> Path:
        return _absolute(value)

    @field_validator("dependency_class_info_folders", mode="before")
    @classmethod
    def _split_dependency_list(cls, value: object) -> tuple[Path, ...]:
        # Accepts repeated flags as well as comma separated values
        if value is None:
            return ()
        if isinstance(value, (str, Path)):
            value = [value]
        folders: list[Path] = []
        for item in value:  # type: ignore[union-attr]
            for part in str(item).split(","):
                if part.strip():
                    folders.append(_absolute(Path(part.strip())))
        return tuple(folders)
