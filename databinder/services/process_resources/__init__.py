"""Resource-processing pipeline."""

from .service import ProcessResourcesOutput, ProcessResourcesService

__all__ = ["ProcessResourcesOutput", "ProcessResourcesService"]
