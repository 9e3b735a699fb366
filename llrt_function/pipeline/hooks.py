"""Command hook chain.

Each stage runs the LLRT steps first, then the caller's own hook for that
stage. Stages are kept as explicit ordered lists so their order can be
inspected without running any commands.
"""

import logging
import posixpath
import shlex
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..errors import PipelineCompositionError
from ..models import HookStage

logger = logging.getLogger(__name__)

# step(input_dir, output_dir) -> shell commands
HookStep = Callable[[str, str], list[str]]


class CopyBinaryStep:
    """Copies the bootstrap binary into the bundle output directory."""

    def __init__(self, binary_path: str | Path) -> None:
        self.binary_path = str(binary_path)

    def __call__(self, input_dir: str, output_dir: str) -> list[str]:
        destination = posixpath.join(output_dir, "bootstrap")
        return [f"cp {shlex.quote(self.binary_path)} {shlex.quote(destination)}"]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CopyBinaryStep) and other.binary_path == self.binary_path

    def __hash__(self) -> int:
        return hash(self.binary_path)

    def __repr__(self) -> str:
        return f"CopyBinaryStep({self.binary_path!r})"


class CommandHooks:
    """Composed command hooks, callable the way ICommandHooks is.

    Example:
        >>> hooks = CommandHooks({HookStage.AFTER_BUNDLING: [CopyBinaryStep("/cache/bootstrap")]})
        >>> hooks.after_bundling("/in", "/out")
        ['cp /cache/bootstrap /out/bootstrap']
    """

    def __init__(
        self,
        injected: Mapping[HookStage, Sequence[HookStep]] | None = None,
        original: Any = None,
    ) -> None:
        """Build the chain.

        Args:
            injected: LLRT steps per stage, run first
            original: Caller hooks, either an ICommandHooks-like object or a
                mapping of stage name to callable

        Raises:
            PipelineCompositionError: If a caller hook stage is not callable or a
                mapping names an unknown stage
        """
        injected = injected or {}
        _check_stage_names(original)
        self._steps: dict[HookStage, list[HookStep]] = {}
        for stage in HookStage:
            steps = list(injected.get(stage, ()))
            caller_step = _caller_step(original, stage)
            if caller_step is not None:
                steps.append(caller_step)
            self._steps[stage] = steps

    def steps(self, stage: HookStage | str) -> list[HookStep]:
        """Ordered steps of a stage."""
        return list(self._steps[HookStage(stage)])

    def commands(self, stage: HookStage | str, input_dir: str, output_dir: str) -> list[str]:
        """Run every step of ``stage`` and concatenate their commands.

        Raises:
            PipelineCompositionError: If a step returns something other than a list of strings
        """
        stage = HookStage(stage)
        commands: list[str] = []
        for step in self._steps[stage]:
            result = step(input_dir, output_dir)
            if result is None:
                continue
            if isinstance(result, str) or not isinstance(result, Sequence):
                raise PipelineCompositionError(
                    f"Command hook {stage.value} must return a list of commands, got {type(result).__name__}"
                )
            commands.extend(str(command) for command in result)
        return commands

    def before_install(self, input_dir: str, output_dir: str) -> list[str]:
        return self.commands(HookStage.BEFORE_INSTALL, input_dir, output_dir)

    def before_bundling(self, input_dir: str, output_dir: str) -> list[str]:
        return self.commands(HookStage.BEFORE_BUNDLING, input_dir, output_dir)

    def after_bundling(self, input_dir: str, output_dir: str) -> list[str]:
        return self.commands(HookStage.AFTER_BUNDLING, input_dir, output_dir)


def _caller_step(hooks: Any, stage: HookStage) -> HookStep | None:
    if hooks is None:
        return None
    if isinstance(hooks, Mapping):
        step = {_stage_name(name): value for name, value in hooks.items()}.get(stage.value)
    else:
        step = getattr(hooks, stage.value, None)

    if step is None:
        return None
    if not callable(step):
        raise PipelineCompositionError(f"Command hook {stage.value} must be callable, got {type(step).__name__}")
    return step


def _check_stage_names(hooks: Any) -> None:
    if not isinstance(hooks, Mapping):
        return
    stages = [stage.value for stage in HookStage]
    unknown = [name for name in hooks if _stage_name(name) not in stages]
    if unknown:
        names = ", ".join(repr(name) for name in unknown)
        raise PipelineCompositionError(
            f"Unknown command hook stage(s) {names} (expected one of: {', '.join(stages)})"
        )


def _stage_name(name: Any) -> Any:
    return name.value if isinstance(name, HookStage) else name
