"""Base-class generation pipeline."""

from .service import GenerateBaseClassesOutput, GenerateBaseClassesService

__all__ = ["GenerateBaseClassesOutput", "GenerateBaseClassesService"]
