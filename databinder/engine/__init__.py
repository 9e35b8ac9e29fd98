"""Compiler engine boundary for databinder."""

from __future__ import annotations

import importlib

from ..core.exceptions import EngineError
from .interface import (
    BaseClassGenerator,
    Engine,
    LayoutInfoArgs,
    LayoutXmlProcessor,
    ResourceInput,
)


def load_engine(path: str) -> Engine:
    """Instantiate the engine factory named by ``module:attribute``.

    Args:
        path: Import path, e.g. ``databinder.engine.reference:ReferenceEngine``

    Raises:
        EngineError: If the path cannot be imported or is not an Engine.
    """
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise EngineError(message="Engine path must look like 'module:attribute'", engine=path)

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise EngineError(message=f"Cannot load engine: {e}", engine=path, cause=e)

    engine = factory() if isinstance(factory, type) else factory
    if not isinstance(engine, Engine):
        raise EngineError(message=f"{path} is not an Engine", engine=path)
    return engine


__all__ = [
    "BaseClassGenerator",
    "Engine",
    "LayoutInfoArgs",
    "LayoutXmlProcessor",
    "ResourceInput",
    "load_engine",
]
