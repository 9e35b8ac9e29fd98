"""Input staging service."""

from .service import ResourceStager

__all__ = ["ResourceStager"]
