"""Bundling configuration composer.

Contract:
- Inputs: esbuild target, binary type, bootstrap path, layer flag, caller bundling options
- Outputs: BundlingConfig
- Side Effects: None (override_runtime mutates the given construct)
"""

import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import PipelineCompositionError
from ..models import BundlingConfig
from ..models import HookStage
from ..models import LlrtBinaryType
from ..models import OutputFormat
from .externals import external_modules_for
from .hooks import CommandHooks
from .hooks import CopyBinaryStep

logger = logging.getLogger(__name__)

PROVIDED_RUNTIME = "provided.al2023"


class PipelineComposer:
    """Composes LLRT bundling options with the caller's.

    Caller options win on every field except ``command_hooks``: the caller's
    hooks run after the LLRT steps of the same stage.
    """

    def compose(
        self,
        target: str,
        binary_type: LlrtBinaryType,
        binary_path: str | Path,
        wants_layer: bool = False,
        overrides: Any = None,
    ) -> BundlingConfig:
        """Build the bundling configuration of one function.

        Args:
            target: esbuild target chosen by the resolver
            binary_type: Binary type, selects the external module list
            binary_path: Bootstrap binary to ship
            wants_layer: True when the binary reaches the function through a
                shared layer, in which case it is not copied into the bundle
            overrides: Caller bundling options (mapping or BundlingOptions)

        Returns:
            Frozen BundlingConfig

        Raises:
            PipelineCompositionError: If the caller options are malformed
        """
        caller = bundling_overrides(overrides)
        caller_hooks = caller.pop("command_hooks", None)

        injected = {} if wants_layer else {HookStage.AFTER_BUNDLING: [CopyBinaryStep(binary_path)]}
        hooks = CommandHooks(injected, caller_hooks)

        baseline: dict[str, Any] = {
            "target": target,
            "format": OutputFormat.ESM,
            "minify": True,
            "external_modules": external_modules_for(binary_type),
            # local bundling doesn't work on Windows
            "force_docker_bundling": True if sys.platform == "win32" else None,
        }

        try:
            config = BundlingConfig(**{**baseline, **caller, "command_hooks": hooks})
        except ValidationError as e:
            raise PipelineCompositionError(f"Invalid bundling options for LLRT function: {e}") from e

        logger.debug(
            f"Composed bundling: target={config.target}, externals={len(config.external_modules)}, "
            f"copy_binary={not wants_layer}"
        )
        return config


def bundling_overrides(value: Any) -> dict[str, Any]:
    """Normalize caller bundling options into a dict of the fields that are set.

    Accepts None, a mapping of BundlingOptions keyword names, or a CDK
    BundlingOptions struct.

    Raises:
        PipelineCompositionError: If the value is none of those
    """
    if value is None:
        return {}
    if isinstance(value, Mapping):
        options = dict(value)
    elif isinstance(getattr(value, "_values", None), Mapping):
        # jsii structs keep the fields that were set in _values
        options = dict(value._values)
    else:
        raise PipelineCompositionError(
            f"Bundling options must be a mapping or BundlingOptions, got {type(value).__name__}"
        )

    for key in options:
        if not isinstance(key, str):
            raise PipelineCompositionError(f"Bundling option names must be strings, got {key!r}")
    return {key: option for key, option in options.items() if option is not None}


def override_runtime(construct: Any, runtime: str = PROVIDED_RUNTIME) -> None:
    """Point the function's CloudFormation Runtime at the provided runtime.

    Args:
        construct: Function construct whose default child is the CfnFunction
        runtime: Runtime identifier to declare

    Raises:
        PipelineCompositionError: If the construct has no default child
    """
    resource = construct.node.default_child
    if resource is None:
        raise PipelineCompositionError(f"Cannot override runtime of {construct.node.path}: no default child resource")
    resource.add_property_override("Runtime", runtime)
    logger.debug(f"Set Runtime={runtime} on {construct.node.path}")
