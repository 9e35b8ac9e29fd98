"""Data models for databinder."""

from .layout import (
    CLASS_INFO_SUFFIX,
    ClassInfo,
    ClassInfoEntry,
    LayoutImport,
    LayoutInfo,
    LayoutVariable,
)
from .options import (
    DEFAULT_LAYOUT_INFO_ZIP,
    ZIP_EXTENSION,
    GenerateBaseClassesOptions,
    ProcessXmlOptions,
)

__all__ = [
    "CLASS_INFO_SUFFIX",
    "ClassInfo",
    "ClassInfoEntry",
    "LayoutImport",
    "LayoutInfo",
    "LayoutVariable",
    "DEFAULT_LAYOUT_INFO_ZIP",
    "ZIP_EXTENSION",
    "GenerateBaseClassesOptions",
    "ProcessXmlOptions",
]
