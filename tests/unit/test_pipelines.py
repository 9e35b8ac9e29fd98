"""End-to-end tests for both pipelines with the reference engine."""

import zipfile

import pytest

from databinder.core.exceptions import InvalidArgumentError, PipelineError
from databinder.engine import BaseClassGenerator, Engine
from databinder.models import GenerateBaseClassesOptions, ProcessXmlOptions
from databinder.services import GenerateBaseClassesService, ProcessResourcesService
from databinder.storage import DirectoryFileWriter


def _process_options(temp_dir, res_input, **overrides):
    values = dict(
        app_id="com.example.app",
        res_input=res_input,
        res_output=temp_dir / "res-out",
        layout_info_output=temp_dir / "layout-info",
    )
    values.update(overrides)
    return ProcessXmlOptions(**values)


def _gen_options(temp_dir, layout_info, **overrides):
    values = dict(
        layout_info_folder=layout_info,
        package_name="com.example.app",
        class_info_out=temp_dir / "class-info.zip",
        source_file_out=temp_dir / "sources",
    )
    values.update(overrides)
    return GenerateBaseClassesOptions(**values)


class TestProcessResourcesService:
    """Tests for the resource-processing pipeline."""

    def test_unzipped_outputs(self, engine, config, temp_dir, res_dir):
        """Plain folders in, plain folders out, no archives created."""
        options = _process_options(
            temp_dir, res_dir, zip_res_output=False, zip_layout_info=False
        )

        output = ProcessResourcesService(engine, config).run(options)

        assert output.has_bindings
        assert any(options.res_output.rglob("*.xml"))
        assert sorted(p.name for p in options.layout_info_output.iterdir()) == [
            "activity_main-layout.xml",
            "item_row-layout.xml",
        ]
        assert not list(temp_dir.rglob("*.zip"))

    def test_layout_info_zipped_into_folder(self, engine, config, temp_dir, res_dir):
        """A layout-info path without .zip gets layout-info.zip inside it."""
        options = _process_options(
            temp_dir, res_dir, zip_res_output=False, layout_info_output=temp_dir / "out"
        )

        output = ProcessResourcesService(engine, config).run(options)

        archive = temp_dir / "out" / "layout-info.zip"
        assert output.layout_info_output == archive
        with zipfile.ZipFile(archive) as zf:
            assert sorted(zf.namelist()) == ["activity_main-layout.xml", "item_row-layout.xml"]

    def test_layout_info_zip_path_used_verbatim(self, engine, config, temp_dir, res_dir):
        archive = temp_dir / "nested" / "info.zip"
        options = _process_options(temp_dir, res_dir, zip_res_output=False, layout_info_output=archive)

        ProcessResourcesService(engine, config).run(options)

        assert zipfile.is_zipfile(archive)
        assert not (archive / "layout-info.zip").exists()

    def test_resources_zipped_from_archive_input(self, engine, config, temp_dir, res_zip):
        """Archive input is decompressed and resource output re-zipped."""
        options = _process_options(
            temp_dir, res_zip, res_output=temp_dir / "res-out.zip", zip_layout_info=False
        )

        ProcessResourcesService(engine, config).run(options)

        with zipfile.ZipFile(temp_dir / "res-out.zip") as zf:
            names = set(zf.namelist())
        assert {"layout/activity_main.xml", "layout/item_row.xml", "values/strings.xml"} <= names

    def test_temp_directories_released(self, engine, config, temp_dir, res_zip):
        options = _process_options(temp_dir, res_zip, res_output=temp_dir / "res-out.zip")

        ProcessResourcesService(engine, config).run(options)

        assert list(config.workspace.temp_root.iterdir()) == []

    def test_processor_gets_directory_writer_for_res_output(self, engine, config, temp_dir, res_dir):
        created = {}

        class SpyEngine(Engine):
            def create_processor(self, app_id, use_androidx, file_writer):
                created["writer"] = file_writer
                return engine.create_processor(app_id, use_androidx, file_writer)

            def create_generator(self):
                return engine.create_generator()

        options = _process_options(temp_dir, res_dir, zip_res_output=False, zip_layout_info=False)

        ProcessResourcesService(SpyEngine(), config).run(options)

        assert isinstance(created["writer"], DirectoryFileWriter)
        assert created["writer"].base_path == options.res_output
        assert (options.layout_info_output / "activity_main-layout.xml").exists()

    def test_missing_input(self, engine, config, temp_dir):
        options = _process_options(temp_dir, temp_dir / "missing")

        with pytest.raises(InvalidArgumentError):
            ProcessResourcesService(engine, config).run(options)


class TestGenerateBaseClassesService:
    """Tests for the base-class generation pipeline."""

    @pytest.fixture
    def layout_info_zip(self, engine, config, temp_dir, res_dir):
        options = _process_options(
            temp_dir, res_dir, zip_res_output=False, layout_info_output=temp_dir / "info.zip"
        )
        ProcessResourcesService(engine, config).run(options)
        return temp_dir / "info.zip"

    def test_zipped_sources(self, engine, config, temp_dir, layout_info_zip):
        """Sources go into a zip and class-info is always a zip."""
        options = _gen_options(
            temp_dir, layout_info_zip, zip_source_output=True, source_file_out=temp_dir / "src.zip"
        )

        GenerateBaseClassesService(engine, config).run(options)

        with zipfile.ZipFile(temp_dir / "src.zip") as zf:
            assert sorted(zf.namelist()) == [
                "com/example/app/databinding/ActivityMainBinding.java",
                "com/example/app/databinding/ItemRowBinding.java",
            ]
        with zipfile.ZipFile(temp_dir / "class-info.zip") as zf:
            assert zf.namelist() == ["com.example.app-binding_classes.json"]

    def test_folder_sources(self, engine, config, temp_dir, layout_info_zip):
        options = _gen_options(temp_dir, layout_info_zip)

        GenerateBaseClassesService(engine, config).run(options)

        sources = temp_dir / "sources" / "com" / "example" / "app" / "databinding"
        assert sorted(p.name for p in sources.iterdir()) == ["ActivityMainBinding.java", "ItemRowBinding.java"]
        assert zipfile.is_zipfile(temp_dir / "class-info.zip")

    def test_dependency_class_info(self, engine, config, temp_dir, layout_info_zip):
        """Classes exported by a dependency's run are not generated again."""
        first = _gen_options(temp_dir, layout_info_zip, class_info_out=temp_dir / "dep-class-info.zip")
        GenerateBaseClassesService(engine, config).run(first)
        dep_folder = temp_dir / "dep-class-info"
        with zipfile.ZipFile(temp_dir / "dep-class-info.zip") as zf:
            zf.extractall(dep_folder)

        second = _gen_options(
            temp_dir,
            layout_info_zip,
            source_file_out=temp_dir / "second",
            dependency_class_info_folders=[dep_folder],
        )
        GenerateBaseClassesService(engine, config).run(second)

        assert not list((temp_dir / "second").rglob("*.java"))

    def test_missing_layout_info(self, engine, config, temp_dir):
        options = _gen_options(temp_dir, temp_dir / "missing.zip")

        with pytest.raises(InvalidArgumentError) as exc_info:
            GenerateBaseClassesService(engine, config).run(options)

        assert exc_info.value.exists is False

    def test_generator_failure_closes_zip(self, config, temp_dir, layout_info_zip):
        """A generator failure still leaves a readable source zip behind."""

        class FailingGenerator(BaseClassGenerator):
            def generate_all(self, args, writer):
                writer.write("com.example.app.Partial", "class Partial {}")
                raise RuntimeError("boom")

        class FailingEngine(Engine):
            def create_processor(self, app_id, use_androidx, file_writer):
                raise AssertionError("not used")

            def create_generator(self):
                return FailingGenerator()

        options = _gen_options(
            temp_dir, layout_info_zip, zip_source_output=True, source_file_out=temp_dir / "src.zip"
        )

        with pytest.raises(PipelineError) as exc_info:
            GenerateBaseClassesService(FailingEngine(), config).run(options)

        assert exc_info.value.stage == "generate"
        with zipfile.ZipFile(temp_dir / "src.zip") as zf:
            assert zf.namelist() == ["com/example/app/Partial.java"]
        assert not (temp_dir / "class-info.zip").exists()
