"""Composition of resolver, artifact cache, layer registry and composer.

Each LlrtFunction goes through a toolchain; tests and parallel builds can
create their own instead of sharing the process-wide default.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .cache import ArchiveFetcher
from .cache import ArtifactCache
from .cache import HttpArchiveFetcher
from .config import LlrtSettings
from .config import load_config
from .layers import LayerRegistry
from .layers import get_default_layer_registry
from .models import DEFAULT_VERSION
from .models import Architecture
from .models import BundlingConfig
from .models import CacheKey
from .models import ResolvedVariant
from .pipeline import PipelineComposer
from .resolver import VariantResolver
from .resolver import coerce_binary_type
from .storage import get_cache_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedBuild:
    """Everything needed to construct one LLRT function.

    Attributes:
        key: Requested binary variant
        variant: Resolved release asset and esbuild target
        binary_path: Bootstrap binary shipped with the function
        bundling: Composed bundling configuration
    """

    key: CacheKey
    variant: ResolvedVariant
    binary_path: str
    bundling: BundlingConfig


@dataclass
class LlrtToolchain:
    """Resolver, cache, layer registry and composer wired together."""

    settings: LlrtSettings
    resolver: VariantResolver
    cache: ArtifactCache
    layers: LayerRegistry
    composer: PipelineComposer

    @classmethod
    def from_settings(
        cls,
        settings: LlrtSettings | None = None,
        fetcher: ArchiveFetcher | None = None,
        layers: LayerRegistry | None = None,
    ) -> "LlrtToolchain":
        """Build a toolchain.

        Args:
            settings: Settings (default: load_config())
            fetcher: Archive fetcher (default: HttpArchiveFetcher with settings.download_timeout)
            layers: Layer registry (default: the process-wide registry)

        Returns:
            LlrtToolchain
        """
        if settings is None:
            settings = load_config()

        resolver = VariantResolver(settings.release_base)
        cache_root = Path(settings.cache_dir) if settings.cache_dir else get_cache_dir()
        cache = ArtifactCache(
            root=cache_root,
            resolver=resolver,
            fetcher=fetcher or HttpArchiveFetcher(timeout=settings.download_timeout),
            lock_timeout=settings.lock_timeout,
            force_refresh=settings.force_refresh,
        )
        return cls(
            settings=settings,
            resolver=resolver,
            cache=cache,
            layers=layers if layers is not None else get_default_layer_registry(),
            composer=PipelineComposer(),
        )

    def prepare(
        self,
        version: str | None = None,
        architecture: Any = None,
        binary_type: Any = None,
        binary_path: str | None = None,
        wants_layer: bool = False,
        overrides: Any = None,
    ) -> PreparedBuild:
        """Resolve, cache and compose the build of one function.

        When ``binary_path`` is given the cache is bypassed entirely.

        Args:
            version: LLRT version (default: "latest")
            architecture: Function architecture
            binary_type: LLRT binary type (default: STANDARD)
            binary_path: Local bootstrap to use instead of a downloaded one
            wants_layer: Ship the binary through a shared layer
            overrides: Caller bundling options

        Returns:
            PreparedBuild
        """
        key = CacheKey(
            version=version or DEFAULT_VERSION,
            architecture=Architecture.from_value(architecture),
            binary_type=coerce_binary_type(binary_type),
        )
        variant = self.resolver.resolve(key.version, key.architecture, key.binary_type)

        if binary_path:
            logger.debug(f"Using local LLRT binary {binary_path} for {key}")
            resolved_path = str(binary_path)
        else:
            resolved_path = str(self.cache.ensure(key))

        bundling = self.composer.compose(
            target=variant.target,
            binary_type=key.binary_type,
            binary_path=resolved_path,
            wants_layer=wants_layer,
            overrides=overrides,
        )
        return PreparedBuild(key=key, variant=variant, binary_path=resolved_path, bundling=bundling)

    def layer_for(self, scope: Any, prepared: PreparedBuild) -> Any:
        """Shared layer carrying ``prepared.binary_path``."""
        return self.layers.get_or_create(scope, prepared.binary_path)


_default_toolchain: LlrtToolchain | None = None
_default_toolchain_lock = threading.Lock()


def get_default_toolchain() -> LlrtToolchain:
    """Get the process-wide toolchain built from load_config().

    Returns:
        LlrtToolchain instance
    """
    global _default_toolchain
    with _default_toolchain_lock:
        if _default_toolchain is None:
            _default_toolchain = LlrtToolchain.from_settings()
        return _default_toolchain
