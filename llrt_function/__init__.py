"""LLRT runtime support for CDK Node.js functions.

Resolves, downloads and caches LLRT bootstrap binaries and composes the
bundling options that ship them with a NodejsFunction.

Public Interface:
    - LlrtToolchain, PreparedBuild: Resolve/cache/compose one function build
    - VariantResolver: Binary variant → release asset
    - ArtifactCache: Local bootstrap cache
    - LayerRegistry: Shared layer memoization
    - PipelineComposer: Bundling option composition
    - Architecture, LlrtBinaryType, CacheKey: Binary selection

The CDK construct lives in llrt_function.function (LlrtFunction).
"""

from .cache import ArtifactCache
from .cache import HttpArchiveFetcher
from .config import LlrtSettings
from .config import load_config
from .errors import ExtractionError
from .errors import FetchError
from .errors import LlrtError
from .errors import PipelineCompositionError
from .errors import ResolutionError
from .layers import LayerRegistry
from .models import Architecture
from .models import BundlingConfig
from .models import CacheKey
from .models import LlrtBinaryType
from .models import ResolvedVariant
from .pipeline import PipelineComposer
from .resolver import VariantResolver
from .toolchain import LlrtToolchain
from .toolchain import PreparedBuild
from .toolchain import get_default_toolchain

__all__ = [
    "ArtifactCache",
    "HttpArchiveFetcher",
    "LlrtSettings",
    "load_config",
    "LlrtError",
    "ResolutionError",
    "FetchError",
    "ExtractionError",
    "PipelineCompositionError",
    "LayerRegistry",
    "Architecture",
    "BundlingConfig",
    "CacheKey",
    "LlrtBinaryType",
    "ResolvedVariant",
    "PipelineComposer",
    "VariantResolver",
    "LlrtToolchain",
    "PreparedBuild",
    "get_default_toolchain",
]
