"""Data models for llrt_function.

Public Interface:
    - Architecture, LlrtBinaryType: Binary variant selectors
    - CacheKey: (version, architecture, binary type) triple
    - ResolvedVariant: Resolver output
    - BundlingConfig, HookStage: Bundling configuration handed to the CDK
"""

from .binaries import DEFAULT_VERSION
from .binaries import LATEST
from .binaries import Architecture
from .binaries import CacheKey
from .binaries import LlrtBinaryType
from .binaries import ResolvedVariant
from .binaries import check_version
from .bundling import BundlingConfig
from .bundling import HookStage
from .bundling import OutputFormat

__all__ = [
    "LATEST",
    "DEFAULT_VERSION",
    "Architecture",
    "LlrtBinaryType",
    "CacheKey",
    "ResolvedVariant",
    "check_version",
    "BundlingConfig",
    "HookStage",
    "OutputFormat",
]
