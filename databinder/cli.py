"""
databinder CLI.

``databinder <SUBCOMMAND> [flags...]`` where SUBCOMMAND is PROCESS_RESOURCES or
GEN_BASE_CLASSES. Flags keep the single-dash spelling build rules already use,
e.g. ``-resInput``; boolean flags take an explicit ``true``/``false``.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.console import Console

from .core.config import Config, get_config
from .core.exceptions import (
    ArchiveError,
    EngineError,
    InvalidArgumentError,
    PipelineError,
    UnsupportedOperationError,
)
from .core.logging import bind_context, clear_context, get_logger, setup_logging
from .core.types import DispatchResult, ErrorKind, Subcommand
from .engine import load_engine
from .models.options import GenerateBaseClassesOptions, ProcessXmlOptions
from .services import GenerateBaseClassesService, ProcessResourcesService

PROGRAM_NAME = "databinder"

console = Console()
logger = get_logger(__name__)


class BoolArg(str, Enum):
    """Explicit boolean flag value."""

    true = "true"
    false = "false"


def _flag(value: BoolArg) -> bool:
    return value == BoolArg.true


process_resources_app = typer.Typer(add_completion=False)
gen_base_classes_app = typer.Typer(add_completion=False)


@process_resources_app.command(help="Process Android resources")
def process_resources(
    app_id: str = typer.Option(
        ...,
        "-package",
        help="The package name of the application. This should be the same package that R file uses.",
    ),
    res_input: Path = typer.Option(
        ...,
        "-resInput",
        help="The folder (or zip of it) which contains merged resources: the layout folder, "
        "drawable folder etc.",
    ),
    res_output: Path = typer.Option(
        ...,
        "-resOutput",
        help="The output zip file or folder which will contain processed resources. "
        "This should be the input for aapt.",
    ),
    layout_info_output: Path = typer.Option(
        ...,
        "-layoutInfoOutput",
        help="The folder into which the layout-info files are exported. A path ending in .zip "
        "names the zip file itself.",
    ),
    zip_layout_info: BoolArg = typer.Option(
        BoolArg.true,
        "-zipLayoutInfo",
        case_sensitive=False,
        help="Whether the layout-info files should be zipped into layout-info.zip in the "
        "layout-info output folder.",
    ),
    zip_res_output: BoolArg = typer.Option(
        BoolArg.true,
        "-zipResOutput",
        case_sensitive=False,
        help="Whether the processed resources should be zipped into one file.",
    ),
    enable_view_binding: BoolArg = typer.Option(BoolArg.true, "-enableViewBinding", case_sensitive=False),
    enable_data_binding: BoolArg = typer.Option(BoolArg.true, "-enableDataBinding", case_sensitive=False),
    use_androidx: BoolArg = typer.Option(
        BoolArg.false,
        "-useAndroidX",
        case_sensitive=False,
        help="Specifies whether data binding should use androidX packages or not.",
    ),
) -> ProcessXmlOptions:
    return ProcessXmlOptions(
        app_id=app_id,
        res_input=res_input,
        res_output=res_output,
        layout_info_output=layout_info_output,
        zip_layout_info=_flag(zip_layout_info),
        zip_res_output=_flag(zip_res_output),
        enable_view_binding=_flag(enable_view_binding),
        enable_data_binding=_flag(enable_data_binding),
        use_androidx=_flag(use_androidx),
    )


@gen_base_classes_app.command(help="Generate the base classes and class info from layout files")
def gen_base_classes(
    layout_info_folder: Path = typer.Option(
        ...,
        "-layoutInfoFiles",
        help="The zip file or folder containing the layout info files.",
    ),
    dependency_class_info_list: Optional[List[Path]] = typer.Option(
        None,
        "-dependencyClassInfoList",
        help="Class info folders extracted from dependencies, i.e. this task's output when "
        "it ran for the dependency. Repeatable and comma separated.",
    ),
    package_name: str = typer.Option(
        ...,
        "-package",
        help="The package name of the application. This should be the same package that R file uses.",
    ),
    class_info_out: Path = typer.Option(
        ...,
        "-classInfoOut",
        help="The zip file this task writes the class info into. It should be passed down to dependants.",
    ),
    source_file_out: Path = typer.Option(
        ...,
        "-sourceOut",
        help="The folder or zip file where this task should generate java sources.",
    ),
    zip_source_output: BoolArg = typer.Option(
        BoolArg.false,
        "-zipSourceOutput",
        case_sensitive=False,
        help="Whether the source output should be exported as 1 zip file instead of a folder.",
    ),
    use_androidx: BoolArg = typer.Option(
        BoolArg.true,
        "-useAndroidX",
        case_sensitive=False,
        help="Specifies whether data binding should use androidX packages or not.",
    ),
    enable_view_binding: BoolArg = typer.Option(BoolArg.true, "-enableViewBinding", case_sensitive=False),
    enable_data_binding: BoolArg = typer.Option(BoolArg.true, "-enableDataBinding", case_sensitive=False),
) -> GenerateBaseClassesOptions:
    return GenerateBaseClassesOptions(
        layout_info_folder=layout_info_folder,
        dependency_class_info_folders=dependency_class_info_list or [],
        package_name=package_name,
        class_info_out=class_info_out,
        source_file_out=source_file_out,
        zip_source_output=_flag(zip_source_output),
        use_androidx=_flag(use_androidx),
        enable_view_binding=_flag(enable_view_binding),
        enable_data_binding=_flag(enable_data_binding),
    )


_APPS: dict[Subcommand, typer.Typer] = {
    Subcommand.PROCESS_RESOURCES: process_resources_app,
    Subcommand.GEN_BASE_CLASSES: gen_base_classes_app,
}


def _command(subcommand: Subcommand) -> click.Command:
    return typer.main.get_command(_APPS[subcommand])


def print_usage() -> None:
    """Print both subcommands and their flags."""
    console.print(
        "This binary can be used to either process xml resources or generate "
        "base classes for data binding.",
        highlight=False,
    )
    console.print()
    console.print(f"Usage: {PROGRAM_NAME} [command] [command options]", markup=False, highlight=False)
    console.print("  Commands:")
    for subcommand in Subcommand:
        command = _command(subcommand)
        console.print(f"    [bold]{subcommand.value}[/bold]      {command.help or ''}", highlight=False)
        console.print(f"      Usage: {subcommand.value} [options]", markup=False, highlight=False)
        console.print("        Options:")
        for param in command.params:
            if not isinstance(param, click.Option):
                continue
            marker = "*" if param.required else " "
            flag = ", ".join(param.opts)
            default = "" if param.required or param.default is None else f" (default: {_default_text(param.default)})"
            console.print(f"        {marker} {flag}{default}", markup=False, highlight=False)
            if param.help:
                console.print(f"            {param.help}", markup=False, highlight=False)
    console.print("  * required", markup=False, highlight=False)


def _default_text(value: object) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _parse_options(
    subcommand: Subcommand, args: Sequence[str]
) -> ProcessXmlOptions | GenerateBaseClassesOptions | None:
    """Parse ``args`` for ``subcommand``; None when only help was requested.

    Raises:
        click.ClickException: On unknown, missing or malformed flags.
    """
    result = _command(subcommand).main(
        args=list(args),
        prog_name=f"{PROGRAM_NAME} {subcommand.value}",
        standalone_mode=False,
    )
    if isinstance(result, (ProcessXmlOptions, GenerateBaseClassesOptions)):
        return result
    return None


def _error_kind(error: Exception) -> ErrorKind:
    if isinstance(error, InvalidArgumentError):
        return ErrorKind.INVALID_ARGUMENT
    if isinstance(error, UnsupportedOperationError):
        return ErrorKind.UNSUPPORTED_OPERATION
    if isinstance(error, (ArchiveError, OSError)):
        return ErrorKind.IO_FAILURE
    if isinstance(error, EngineError):
        return ErrorKind.ENGINE
    if isinstance(error, PipelineError) and error.cause is not None:
        return _error_kind(error.cause)
    return ErrorKind.INTERNAL


def dispatch(argv: Sequence[str], config: Config | None = None) -> DispatchResult:
    """Run the subcommand named by ``argv[0]`` with the remaining flags.

    Never raises for pipeline failures: every outcome is returned as a
    DispatchResult whose ``exit_code`` the caller hands to the OS.
    """
    config = config or get_config()

    if not argv:
        print_usage()
        return DispatchResult.fail(ErrorKind.USAGE, "No subcommand given")

    subcommand = Subcommand.parse(argv[0])
    if subcommand is None:
        print_usage()
        return DispatchResult.fail(ErrorKind.USAGE, f"Unknown subcommand: {argv[0]}")

    try:
        options = _parse_options(subcommand, argv[1:])
    except click.ClickException as e:
        e.show()
        return DispatchResult.fail(ErrorKind.FLAG_PARSING, e.format_message(), subcommand)

    if options is None:
        return DispatchResult.ok(subcommand)

    bind_context(subcommand=subcommand.value)
    try:
        engine = load_engine(config.engine)
        if isinstance(options, ProcessXmlOptions):
            ProcessResourcesService(engine, config).run(options)
        else:
            GenerateBaseClassesService(engine, config).run(options)
    except Exception as e:
        logger.exception("Command failed", error=str(e))
        return DispatchResult.fail(
            _error_kind(e),
            str(e),
            subcommand,
            legacy_exit_zero=config.legacy_exit_zero,
        )
    finally:
        clear_context()

    return DispatchResult.ok(subcommand)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the CLI."""
    config = get_config()
    setup_logging(config)
    result = dispatch(sys.argv[1:] if argv is None else argv, config)
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
