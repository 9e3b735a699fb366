"""Bundling pipeline composition for LLRT functions.

Public Interface:
    - PipelineComposer: Builds the BundlingConfig of one function
    - CommandHooks, CopyBinaryStep: Ordered command hook chain
    - external_modules_for: Modules embedded in each binary type
    - override_runtime: Switch a function to the provided runtime
"""

from .composer import PROVIDED_RUNTIME
from .composer import PipelineComposer
from .composer import bundling_overrides
from .composer import override_runtime
from .externals import EXTERNAL_MODULES
from .externals import external_modules_for
from .hooks import CommandHooks
from .hooks import CopyBinaryStep
from .hooks import HookStep

__all__ = [
    "PROVIDED_RUNTIME",
    "PipelineComposer",
    "bundling_overrides",
    "override_runtime",
    "EXTERNAL_MODULES",
    "external_modules_for",
    "CommandHooks",
    "CopyBinaryStep",
    "HookStep",
]
