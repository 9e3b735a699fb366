"""LlrtFunction: a NodejsFunction that runs on LLRT instead of Node.js.

Drop-in replacement for ``aws_lambda_nodejs.NodejsFunction``: it takes the
same keyword arguments plus the llrt_* options, bundles the handler for LLRT
and ships the LLRT bootstrap with it on the provided.al2023 runtime.
"""

import logging
from typing import Any

import jsii
from aws_cdk import aws_lambda
from aws_cdk import aws_lambda_nodejs
from constructs import Construct

from .models import BundlingConfig
from .models import LlrtBinaryType
from .pipeline import CommandHooks
from .pipeline import override_runtime
from .toolchain import LlrtToolchain
from .toolchain import PreparedBuild
from .toolchain import get_default_toolchain

logger = logging.getLogger(__name__)


@jsii.implements(aws_lambda_nodejs.ICommandHooks)
class _CdkCommandHooks:
    """Exposes a CommandHooks chain to the CDK bundler."""

    def __init__(self, hooks: CommandHooks) -> None:
        self._hooks = hooks

    def before_install(self, input_dir: str, output_dir: str) -> list[str]:
        return self._hooks.before_install(input_dir, output_dir)

    def before_bundling(self, input_dir: str, output_dir: str) -> list[str]:
        return self._hooks.before_bundling(input_dir, output_dir)

    def after_bundling(self, input_dir: str, output_dir: str) -> list[str]:
        return self._hooks.after_bundling(input_dir, output_dir)


def to_bundling_options(config: BundlingConfig) -> aws_lambda_nodejs.BundlingOptions:
    """Convert a BundlingConfig into the CDK BundlingOptions struct."""
    options = config.to_options()
    options["format"] = aws_lambda_nodejs.OutputFormat[config.format.name]
    options["command_hooks"] = _CdkCommandHooks(config.command_hooks)
    return aws_lambda_nodejs.BundlingOptions(**options)


class LlrtFunction(aws_lambda_nodejs.NodejsFunction):
    """A Node.js Lambda function bundled for and running on LLRT.

    Example:
        >>> LlrtFunction(
        ...     stack,
        ...     "Handler",
        ...     entry="lambda/handler.ts",
        ...     architecture=aws_lambda.Architecture.ARM_64,
        ...     llrt_binary_type=LlrtBinaryType.FULL_SDK,
        ... )
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        llrt_version: str | None = None,
        llrt_binary_type: LlrtBinaryType | str | None = None,
        llrt_binary_path: str | None = None,
        llrt_layer: bool = False,
        toolchain: LlrtToolchain | None = None,
        bundling: Any = None,
        **kwargs: Any,
    ) -> None:
        """Create the function.

        Args:
            scope: Construct scope
            id: Construct id
            llrt_version: LLRT release tag, see https://github.com/awslabs/llrt/releases (default: "latest")
            llrt_binary_type: Embedded AWS SDK subset (default: STANDARD)
            llrt_binary_path: Local bootstrap binary, relative to the function's project_root;
                when set nothing is downloaded
            llrt_layer: Ship the runtime in a layer shared by every LlrtFunction using the same binary
            toolchain: Toolchain to resolve and cache binaries with (default: process-wide toolchain)
            bundling: BundlingOptions or a mapping of its keyword arguments
            **kwargs: Any other NodejsFunction keyword argument
        """
        toolchain = toolchain or get_default_toolchain()
        prepared = toolchain.prepare(
            version=llrt_version,
            architecture=kwargs.get("architecture"),
            binary_type=llrt_binary_type,
            binary_path=llrt_binary_path,
            wants_layer=llrt_layer,
            overrides=bundling,
        )

        layers = list(kwargs.pop("layers", None) or [])
        if llrt_layer:
            layers.append(toolchain.layer_for(scope, prepared))

        props: dict[str, Any] = {
            # removes an unnecessary environment variable
            "aws_sdk_connection_reuse": False,
            # removes a warning about the runtime; provided.al2023 is set below
            "runtime": aws_lambda.Runtime("nodejs20.x", aws_lambda.RuntimeFamily.NODEJS),
            **kwargs,
            "layers": layers or None,
            "bundling": to_bundling_options(prepared.bundling),
        }
        super().__init__(scope, id, **props)

        self._llrt_build = prepared
        override_runtime(self)
        logger.info(f"Configured LLRT function {self.node.path} ({prepared.key}, target={prepared.variant.target})")

    @property
    def llrt_build(self) -> PreparedBuild:
        """Resolved binary and bundling configuration of this function."""
        return self._llrt_build
