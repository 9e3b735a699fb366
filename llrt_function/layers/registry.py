"""Registry of shared LLRT layers.

Functions that use the same bootstrap binary share one layer instead of each
embedding a copy. Layers are keyed by the bootstrap path string and never evicted.
"""

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LAYER_ID_PREFIX = "llrt-layer"

# factory(scope, construct_id, content_root) -> layer handle
LayerFactory = Callable[[Any, str, str], Any]


class LayerRegistry:
    """Memoizes one layer per distinct bootstrap path.

    The layer content is the bootstrap's whole directory, which holds exactly
    the extracted runtime payload.
    """

    def __init__(self, factory: LayerFactory) -> None:
        """Initialize registry.

        Args:
            factory: Builds a layer from (scope, construct_id, content_root)
        """
        self._factory = factory
        self._layers: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get_or_create(self, scope: Any, path: str | Path) -> Any:
        """Get the layer for ``path`` or create it in ``scope``.

        Args:
            scope: Construct scope the layer is created in on first request
            path: Path to the bootstrap binary

        Returns:
            Layer handle; identical for identical path strings
        """
        key = str(path)
        with self._lock:
            if key not in self._layers:
                construct_id = f"{LAYER_ID_PREFIX}{len(self._layers)}"
                content_root = os.path.dirname(key)
                self._layers[key] = self._factory(scope, construct_id, content_root)
                logger.info(f"Created shared LLRT layer {construct_id} from {content_root}")
            return self._layers[key]

    def __contains__(self, path: object) -> bool:
        return str(path) in self._layers

    def __len__(self) -> int:
        return len(self._layers)


def cdk_layer_factory(scope: Any, construct_id: str, content_root: str) -> Any:
    """Build an ``aws_lambda.LayerVersion`` from a local directory."""
    from aws_cdk import aws_lambda

    return aws_lambda.LayerVersion(scope, construct_id, code=aws_lambda.Code.from_asset(content_root))


_default_registry: LayerRegistry | None = None
_default_registry_lock = threading.Lock()


def get_default_layer_registry() -> LayerRegistry:
    """Get the process-wide layer registry.

    Returns:
        LayerRegistry backed by CDK LayerVersion constructs
    """
    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = LayerRegistry(cdk_layer_factory)
        return _default_registry
