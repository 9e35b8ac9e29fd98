"""Services package for databinder."""

from .base_classes import GenerateBaseClassesService
from .process_resources import ProcessResourcesService
from .staging import ResourceStager

__all__ = [
    "GenerateBaseClassesService",
    "ProcessResourcesService",
    "ResourceStager",
]
