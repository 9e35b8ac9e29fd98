"""
Reference compiler engine.

A small engine bundled so the tool works without an external compiler:

1. Copies resources to the output tree, unwrapping data binding layouts
2. Records a layout-info file per binding-enabled layout
3. Generates one Java binding base class per layout
4. Exports the module's class-info for dependent modules
"""

from __future__ import annotations

import shutil
import xml.etree.ElementTree as ET
from pathlib import Path

from ..core.exceptions import EngineError
from ..core.logging import get_logger
from ..models.layout import (
    CLASS_INFO_SUFFIX,
    ClassInfo,
    ClassInfoEntry,
    LayoutImport,
    LayoutInfo,
    LayoutVariable,
)
from ..storage import SourceFileWriter
from .interface import (
    BaseClassGenerator,
    Engine,
    LayoutInfoArgs,
    LayoutXmlProcessor,
    ResourceInput,
)

logger = get_logger(__name__)

ANDROID_NS = "http://schemas.android.com/apk/res/android"
APP_NS = "http://schemas.android.com/apk/res-auto"
TOOLS_NS = "http://schemas.android.com/tools"

ET.register_namespace("android", ANDROID_NS)
ET.register_namespace("app", APP_NS)
ET.register_namespace("tools", TOOLS_NS)

_VIEW_PACKAGE_TYPES = {"View", "ViewGroup", "ViewStub", "SurfaceView", "TextureView"}


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _is_layout_file(relative: Path) -> bool:
    folder = relative.parent.name
    return relative.suffix == ".xml" and (folder == "layout" or folder.startswith("layout-"))


def _qualified_view_type(node_type: str) -> str:
    if "." in node_type:
        return node_type
    if node_type in ("merge", "include"):
        return "android.view.View"
    if node_type in _VIEW_PACKAGE_TYPES:
        return f"android.view.{node_type}"
    return f"android.widget.{node_type}"


class ReferenceLayoutXmlProcessor(LayoutXmlProcessor):
    """Layout processor for one module."""

    def __init__(self, app_id: str, file_writer: SourceFileWriter) -> None:
        self.app_id = app_id
        self.file_writer = file_writer
        self.layouts: list[LayoutInfo] = []

    def process_resources(
        self,
        resource_input: ResourceInput,
        enable_view_binding: bool,
        enable_data_binding: bool,
    ) -> bool:
        root_in = resource_input.root_in_folder
        root_out = resource_input.root_out_folder
        root_out.mkdir(parents=True, exist_ok=True)

        for src in sorted(p for p in root_in.rglob("*") if p.is_file()):
            relative = src.relative_to(root_in)
            dest = root_out / relative
            dest.parent.mkdir(parents=True, exist_ok=True)

            info = None
            if _is_layout_file(relative):
                info = self._process_layout(src, dest, enable_view_binding, enable_data_binding)
            if info is None:
                shutil.copy2(src, dest)
            else:
                self.layouts.append(info)
                logger.debug("Processed layout", layout=info.layout, binding_data=info.is_binding_data)

        return bool(self.layouts)

    def _process_layout(
        self,
        src: Path,
        dest: Path,
        enable_view_binding: bool,
        enable_data_binding: bool,
    ) -> LayoutInfo | None:
        """Write the processed layout to ``dest`` and describe it.

        Returns None when the layout needs no binding class; the caller then
        copies it unchanged.
        """
        try:
            tree = ET.parse(src)
        except ET.ParseError as e:
            raise EngineError(message=f"Cannot parse layout {src}", engine="reference", cause=e)

        root = tree.getroot()
        info = LayoutInfo(
            layout=src.stem,
            directory=src.parent.name,
            module_package=self.app_id,
            file_path=str(src),
            root_node_type=_local_name(root.tag),
            is_merge=_local_name(root.tag) == "merge",
        )

        if root.tag == "layout":
            if not enable_data_binding:
                logger.warning("Data binding is disabled, leaving layout untouched", layout=str(src))
                return None
            return self._unwrap_data_layout(root, dest, info)

        if not enable_view_binding:
            return None
        if root.get(f"{{{TOOLS_NS}}}viewBindingIgnore") == "true":
            return None
        shutil.copy2(src, dest)
        return info

    def _unwrap_data_layout(self, root: ET.Element, dest: Path, info: LayoutInfo) -> LayoutInfo:
        data = root.find("data")
        views = [child for child in root if child.tag != "data"]
        if len(views) != 1:
            raise EngineError(
                message=f"Layout {info.file_path} must have exactly one root view, found {len(views)}",
                engine="reference",
            )
        view = views[0]

        if data is not None:
            info.variables = [
                LayoutVariable(name=v.get("name", ""), type=v.get("type", ""))
                for v in data.findall("variable")
            ]
            info.imports = [
                LayoutImport(type=i.get("type", ""), alias=i.get("alias"))
                for i in data.findall("import")
            ]

        # Binding expressions are resolved at generation time; aapt must not see them
        count = 0
        for element in view.iter():
            for key in [k for k, v in element.attrib.items() if v.startswith("@{")]:
                del element.attrib[key]
                count += 1

        info.is_binding_data = True
        info.root_node_type = _local_name(view.tag)
        info.is_merge = info.root_node_type == "merge"
        info.expression_count = count
        ET.ElementTree(view).write(dest, encoding="utf-8", xml_declaration=True)
        return info

    def write_layout_info_files(self, out_dir: Path, writer: SourceFileWriter | None = None) -> None:
        if writer is None:
            writer = self.file_writer
        for info in self.layouts:
            writer.write(out_dir / info.export_file_name, info.to_xml())
        logger.debug("Wrote layout-info files", count=len(self.layouts), out_dir=str(out_dir))


class ReferenceBaseClassGenerator(BaseClassGenerator):
    """Generates binding base classes from staged layout-info files."""

    def generate_all(self, args: LayoutInfoArgs, writer: SourceFileWriter) -> None:
        layouts = self._load_layouts(args.info_folder)
        exported = self._load_dependency_classes(args.dependency_classes_folders)
        package = f"{args.package_name}.databinding"
        class_info = ClassInfo(module_package=args.package_name)

        for info in layouts:
            if info.is_binding_data and not args.enable_data_binding:
                continue
            if not info.is_binding_data and not args.enable_view_binding:
                continue

            qualified_name = f"{package}.{info.class_name}"
            if qualified_name in exported:
                logger.debug("Binding class provided by a dependency", qualified_name=qualified_name)
                continue

            if info.is_binding_data:
                source = self._render_data_binding(package, info, args)
            else:
                source = self._render_view_binding(package, info, args)
            writer.write(qualified_name, source)

            class_info.mappings[info.layout] = ClassInfoEntry(
                qualified_name=qualified_name,
                module_package=args.package_name,
                variables={v.name: info.resolve_type(v.type) for v in info.variables},
            )

        args.artifact_folder.mkdir(parents=True, exist_ok=True)
        (args.artifact_folder / class_info.file_name).write_text(
            class_info.model_dump_json(indent=2), encoding="utf-8"
        )
        logger.debug("Generated binding classes", count=len(class_info.mappings))

    def _load_layouts(self, info_folder: Path) -> list[LayoutInfo]:
        """Load layout-info files, merging configurations of the same layout."""
        merged: dict[str, LayoutInfo] = {}
        for path in sorted(info_folder.rglob("*.xml")):
            info = LayoutInfo.from_xml(path.read_text(encoding="utf-8"))
            existing = merged.get(info.layout)
            if existing is None:
                merged[info.layout] = info
                continue
            known = {v.name for v in existing.variables}
            existing.variables.extend(v for v in info.variables if v.name not in known)
            existing.is_binding_data = existing.is_binding_data or info.is_binding_data
        return list(merged.values())

    def _load_dependency_classes(self, folders: tuple[Path, ...]) -> set[str]:
        exported: set[str] = set()
        for folder in folders:
            if not folder.is_dir():
                logger.warning("Dependency class-info folder not found", folder=str(folder))
                continue
            for path in sorted(folder.rglob(f"*{CLASS_INFO_SUFFIX}")):
                dependency = ClassInfo.model_validate_json(path.read_text(encoding="utf-8"))
                exported.update(entry.qualified_name for entry in dependency.mappings.values())
        return exported

    def _render_data_binding(self, package: str, info: LayoutInfo, args: LayoutInfoArgs) -> str:
        support = "androidx" if args.use_androidx else "android"
        annotation = "androidx.annotation" if args.use_androidx else "android.support.annotation"
        fields = []
        accessors = []
        for var in info.variables:
            var_type = info.resolve_type(var.type)
            suffix = var.name[:1].upper() + var.name[1:]
            fields.append(f"  @Nullable\n  protected {var_type} m{suffix};\n")
            accessors.append(
                f"  public abstract void set{suffix}(@Nullable {var_type} {var.name});\n\n"
                f"  @Nullable\n"
                f"  public {var_type} get{suffix}() {{\n"
                f"    return m{suffix};\n"
                f"  }}\n"
            )

        return f'''package {package};

import android.view.LayoutInflater;
import android.view.View;
import android.view.ViewGroup;
import {annotation}.NonNull;
import {annotation}.Nullable;
import {support}.databinding.DataBindingUtil;
import {support}.databinding.ViewDataBinding;
import {args.package_name}.R;

public abstract class {info.class_name} extends ViewDataBinding {{
{"".join(fields)}
  protected {info.class_name}(Object _bindingComponent, View _root, int _localFieldCount) {{
    super(_bindingComponent, _root, _localFieldCount);
  }}

{chr(10).join(accessors)}
  @NonNull
  public static {info.class_name} inflate(@NonNull LayoutInflater inflater,
      @Nullable ViewGroup root, boolean attachToRoot) {{
    return DataBindingUtil.inflate(inflater, R.layout.{info.layout}, root, attachToRoot);
  }}
}}
'''

    def _render_view_binding(self, package: str, info: LayoutInfo, args: LayoutInfoArgs) -> str:
        annotation = "androidx.annotation" if args.use_androidx else "android.support.annotation"
        root_type = _qualified_view_type(info.root_node_type)

        return f'''package {package};

import android.view.LayoutInflater;
import android.view.View;
import android.view.ViewGroup;
import {annotation}.NonNull;
import {annotation}.Nullable;
import androidx.viewbinding.ViewBinding;
import {args.package_name}.R;

public final class {info.class_name} implements ViewBinding {{
  @NonNull
  private final {root_type} rootView;

  private {info.class_name}(@NonNull {root_type} rootView) {{
    this.rootView = rootView;
  }}

  @Override
  @NonNull
  public {root_type} getRoot() {{
    return rootView;
  }}

  @NonNull
  public static {info.class_name} inflate(@NonNull LayoutInflater inflater,
      @Nullable ViewGroup parent, boolean attachToParent) {{
    View root = inflater.inflate(R.layout.{info.layout}, parent, false);
    if (attachToParent) {{
      parent.addView(root);
    }}
    return bind(root);
  }}

  @NonNull
  public static {info.class_name} bind(@NonNull View rootView) {{
    return new {info.class_name}(({root_type}) rootView);
  }}
}}
'''


class ReferenceEngine(Engine):
    """Factory for the reference processor and generator."""

    NAME = "reference"

    def create_processor(
        self, app_id: str, use_androidx: bool, file_writer: SourceFileWriter
    ) -> LayoutXmlProcessor:
        # use_androidx only affects generated sources
        return ReferenceLayoutXmlProcessor(app_id, file_writer)

    def create_generator(self) -> BaseClassGenerator:
        return ReferenceBaseClassGenerator()
