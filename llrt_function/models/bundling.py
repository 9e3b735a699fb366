"""Bundling configuration models.

BundlingConfig mirrors the subset of ``aws_lambda_nodejs.BundlingOptions``
that LLRT cares about; any other option the caller sets is carried through
as an extra field.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


class HookStage(str, Enum):
    """Command hook stages, named after the ICommandHooks methods."""

    BEFORE_INSTALL = "before_install"
    BEFORE_BUNDLING = "before_bundling"
    AFTER_BUNDLING = "after_bundling"


class OutputFormat(str, Enum):
    """esbuild output format."""

    CJS = "cjs"
    ESM = "esm"


class BundlingConfig(BaseModel):
    """Bundling options for one LLRT function.

    Built fresh per function and never mutated afterwards.

    Attributes:
        target: esbuild target, e.g. "es2022"
        format: Output module format
        minify: Whether esbuild minifies the output
        external_modules: Modules left out of the bundle because the binary embeds them
        command_hooks: Composed hook chain (CommandHooks)
        force_docker_bundling: Force containerized bundling (set on Windows)
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        arbitrary_types_allowed=True,
    )

    target: str
    format: OutputFormat = OutputFormat.ESM
    minify: bool = True
    external_modules: list[str] = Field(default_factory=list)
    command_hooks: Any = None
    force_docker_bundling: bool | None = None

    @field_validator("format", mode="before")
    @classmethod
    def coerce_format(cls, v: Any) -> Any:
        """Accept strings and CDK OutputFormat members (whose names are CJS/ESM)."""
        if isinstance(v, OutputFormat):
            return v
        if isinstance(v, str):
            return v.lower()
        name = getattr(v, "name", None)
        if isinstance(name, str):
            return name.lower()
        return v

    @field_validator("external_modules")
    @classmethod
    def drop_duplicates(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def to_options(self) -> dict[str, Any]:
        """Return keyword arguments for BundlingOptions, without unset values."""
        options = {name: getattr(self, name) for name in type(self).model_fields}
        options.update(self.model_extra or {})
        return {key: value for key, value in options.items() if value is not None}
