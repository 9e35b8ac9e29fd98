"""Unit tests for option and layout-info models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from databinder.core.types import DispatchResult, ErrorKind, Subcommand
from databinder.models import (
    ClassInfo,
    ClassInfoEntry,
    GenerateBaseClassesOptions,
    LayoutImport,
    LayoutInfo,
    LayoutVariable,
    ProcessXmlOptions,
)


def _process_options(**overrides):
    values = dict(
        app_id="com.example.app",
        res_input=Path("/in/res"),
        res_output=Path("/out/res.zip"),
        layout_info_output=Path("/out/info"),
    )
    values.update(overrides)
    return ProcessXmlOptions(**values)


class TestProcessXmlOptions:
    """Tests for ProcessXmlOptions."""

    def test_defaults(self):
        options = _process_options()
        assert options.zip_layout_info
        assert options.zip_res_output
        assert options.enable_view_binding
        assert options.enable_data_binding
        assert not options.use_androidx

    def test_paths_are_absolute(self):
        options = _process_options(res_input=Path("relative/res"))
        assert options.res_input.is_absolute()

    def test_frozen(self):
        options = _process_options()
        with pytest.raises(ValidationError):
            options.app_id = "other"

    def test_layout_info_target_for_folder(self):
        """A folder gets the default zip name inside it."""
        options = _process_options(layout_info_output=Path("/tmp/out"))
        assert options.layout_info_target() == (Path("/tmp/out"), Path("/tmp/out/layout-info.zip"))

    def test_layout_info_target_for_zip_path(self):
        """A .zip path is the archive and its parent the folder."""
        options = _process_options(layout_info_output=Path("/tmp/out/Info.ZIP"))
        assert options.layout_info_is_zip_path
        assert options.layout_info_target() == (Path("/tmp/out"), Path("/tmp/out/Info.ZIP"))


class TestGenerateBaseClassesOptions:
    """Tests for GenerateBaseClassesOptions."""

    def test_defaults(self):
        options = GenerateBaseClassesOptions(
            layout_info_folder=Path("/in/info.zip"),
            package_name="com.example.app",
            class_info_out=Path("/out/class-info.zip"),
            source_file_out=Path("/out/src"),
        )
        assert options.dependency_class_info_folders == ()
        assert not options.zip_source_output
        assert options.use_androidx

    def test_dependency_list_accepts_commas(self):
        options = GenerateBaseClassesOptions(
            layout_info_folder=Path("/in/info.zip"),
            dependency_class_info_folders=["/deps/a,/deps/b", Path("/deps/c")],
            package_name="com.example.app",
            class_info_out=Path("/out/class-info.zip"),
            source_file_out=Path("/out/src"),
        )
        assert options.dependency_class_info_folders == (
            Path("/deps/a"),
            Path("/deps/b"),
            Path("/deps/c"),
        )


class TestLayoutInfo:
    """Tests for layout-info serialization."""

    def test_xml_round_trip(self):
        info = LayoutInfo(
            layout="activity_main",
            directory="layout-land",
            module_package="com.example.app",
            file_path="/res/layout-land/activity_main.xml",
            is_binding_data=True,
            root_node_type="LinearLayout",
            variables=[LayoutVariable(name="user", type="User")],
            imports=[LayoutImport(type="com.example.app.model.User")],
            expression_count=2,
        )

        parsed = LayoutInfo.from_xml(info.to_xml())

        assert parsed == info
        assert parsed.export_file_name == "activity_main-layout-land.xml"

    def test_class_name(self):
        assert LayoutInfo(layout="activity_main", module_package="p").class_name == "ActivityMainBinding"
        assert LayoutInfo(layout="item", module_package="p").class_name == "ItemBinding"

    def test_resolve_type_uses_alias(self):
        info = LayoutInfo(
            layout="main",
            module_package="p",
            imports=[LayoutImport(type="com.example.Thing", alias="Alias")],
        )
        assert info.resolve_type("Alias") == "com.example.Thing"
        assert info.resolve_type("String") == "String"

    def test_class_info_file_name(self):
        class_info = ClassInfo(
            module_package="com.example.app",
            mappings={"main": ClassInfoEntry(qualified_name="a.B", module_package="com.example.app")},
        )
        assert class_info.file_name == "com.example.app-binding_classes.json"


class TestDispatchTypes:
    """Tests for subcommand parsing and exit code mapping."""

    def test_subcommand_parse(self):
        assert Subcommand.parse("PROCESS_RESOURCES") is Subcommand.PROCESS_RESOURCES
        assert Subcommand.parse("GEN_BASE_CLASSES") is Subcommand.GEN_BASE_CLASSES
        assert Subcommand.parse("process_resources") is None

    def test_exit_codes(self):
        assert DispatchResult.ok(Subcommand.GEN_BASE_CLASSES).exit_code == 0
        assert DispatchResult.fail(ErrorKind.USAGE, "x").exit_code == 1
        assert DispatchResult.fail(ErrorKind.INVALID_ARGUMENT, "x").exit_code == 3

    def test_legacy_exit_zero_only_for_pipeline_failures(self):
        failed = DispatchResult.fail(ErrorKind.INTERNAL, "x", legacy_exit_zero=True)
        assert not failed.success
        assert failed.exit_code == 0

        usage = DispatchResult.fail(ErrorKind.USAGE, "x", legacy_exit_zero=True)
        assert usage.exit_code == 1
