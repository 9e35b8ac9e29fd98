"""
Layout-info and class-info data models.

Layout-info files describe one layout file's binding surface and travel from
resource processing to base-class generation. Class-info describes the
binding classes a module generated, for the modules that depend on it.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from pydantic import BaseModel, Field

CLASS_INFO_SUFFIX = "-binding_classes.json"


class LayoutVariable(BaseModel):
    """A ``<variable>`` declared in a layout's ``<data>`` block."""

    name: str
    type: str


class LayoutImport(BaseModel):
    """An ``<import>`` declared in a layout's ``<data>`` block."""

    type: str
    alias: str | None = None

    @property
    def name(self) -> str:
        """Name the import is referred to by inside the layout."""
        return self.alias or self.type.rsplit(".", 1)[-1]


class LayoutInfo(BaseModel):
    """Binding-related description of one layout file."""

    layout: str = Field(description="Layout name (file name without extension)")
    directory: str = Field(default="layout", description="Resource folder, e.g. layout-land")
    module_package: str
    file_path: str = Field(default="", description="Absolute path of the source layout")
    is_merge: bool = Field(default=False)
    is_binding_data: bool = Field(default=False, description="Uses the <layout> wrapper")
    root_node_type: str = Field(default="View")
    variables: list[LayoutVariable] = Field(default_factory=list)
    imports: list[LayoutImport] = Field(default_factory=list)
    expression_count: int = Field(default=0, description="Binding expressions stripped")

    @property
    def export_file_name(self) -> str:
        """File name the layout-info is exported under."""
        return f"{self.layout}-{self.directory}.xml"

    @property
    def class_name(self) -> str:
        """Binding class simple name, e.g. ``ActivityMainBinding``."""
        words = re.split(r"[\s_\-]+", self.layout)
        return "".join(word[:1].upper() + word[1:] for word in words) + "Binding"

    def resolve_type(self, type_name: str) -> str:
        """Expand an import alias used as a variable type."""
        for imp in self.imports:
            if imp.name == type_name:
                return imp.type
        return type_name

    def to_xml(self) -> str:
        """Serialize as a layout-info XML document."""
        root = ET.Element(
            "Layout",
            {
                "layout": self.layout,
                "directory": self.directory,
                "modulePackage": self.module_package,
                "filePath": self.file_path,
                "isMerge": str(self.is_merge).lower(),
                "isBindingData": str(self.is_binding_data).lower(),
                "rootNodeType": self.root_node_type,
                "expressionCount": str(self.expression_count),
            },
        )
        for var in self.variables:
            ET.SubElement(root, "Variables", {"name": var.name, "type": var.type})
        for imp in self.imports:
            attrs = {"type": imp.type}
            if imp.alias:
                attrs["alias"] = imp.alias
            ET.SubElement(root, "Imports", attrs)
        ET.indent(root)
        body = ET.tostring(root, encoding="unicode")
        return f'<?xml version="1.0" encoding="utf-8" standalone="yes"?>\n{body}\n'

    @classmethod
    def from_xml(cls, content: str) -> LayoutInfo:
        """Parse a layout-info XML document."""
        root = ET.fromstring(content)
        return cls(
            layout=root.get("layout", ""),
            directory=root.get("directory", "layout"),
            module_package=root.get("modulePackage", ""),
            file_path=root.get("filePath", ""),
            is_merge=root.get("isMerge") == "true",
            is_binding_data=root.get("isBindingData") == "true",
            root_node_type=root.get("rootNodeType", "View"),
            expression_count=int(root.get("expressionCount", "0")),
            variables=[
                LayoutVariable(name=v.get("name", ""), type=v.get("type", ""))
                for v in root.findall("Variables")
            ],
            imports=[
                LayoutImport(type=i.get("type", ""), alias=i.get("alias"))
                for i in root.findall("Imports")
            ],
        )


class ClassInfoEntry(BaseModel):
    """One generated binding class."""

    qualified_name: str
    module_package: str
    variables: dict[str, str] = Field(default_factory=dict)


class ClassInfo(BaseModel):
    """Class-info artifact exported to dependent modules."""

    module_package: str
    mappings: dict[str, ClassInfoEntry] = Field(
        default_factory=dict, description="Layout name to generated class"
    )

    @property
    def file_name(self) -> str:
        return f"{self.module_package}{CLASS_INFO_SUFFIX}"
