"""Shared LLRT layers.

Public Interface:
    - LayerRegistry: Memoizes one layer per bootstrap path
    - get_default_layer_registry: Process-wide registry backed by CDK LayerVersion
"""

from .registry import LayerFactory
from .registry import LayerRegistry
from .registry import get_default_layer_registry

__all__ = [
    "LayerFactory",
    "LayerRegistry",
    "get_default_layer_registry",
]
