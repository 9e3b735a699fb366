"""Binary variant models.

An LLRT release ships one zip per (architecture, binary type); a cached copy
is identified by the release version as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ..errors import ResolutionError

LATEST = "latest"
DEFAULT_VERSION = LATEST


def check_version(version: Any) -> str:
    """Return ``version`` if it is usable as a release tag and a cache directory name.

    Raises:
        ResolutionError: If the version is empty or not a single path segment
    """
    if not isinstance(version, str) or not version:
        raise ResolutionError(f"LLRT version must be a non-empty string, got {version!r}")
    # the version becomes both a URL path segment and a cache directory name
    if version == "." or ".." in version or "/" in version or "\\" in version:
        raise ResolutionError(
            f"Invalid LLRT version {version!r}: expected 'latest' or a release tag such as 'v0.2.0-beta'"
        )
    return version


class Architecture(str, Enum):
    """CPU architecture of the Lambda function."""

    ARM_64 = "arm64"
    X86_64 = "x64"

    @classmethod
    def from_value(cls, value: Any) -> Architecture:
        """Coerce a loosely typed architecture into an Architecture.

        Accepts an Architecture, a string ("arm64", "x64", "x86_64"), or any
        object with a ``name`` attribute such as ``aws_lambda.Architecture``.
        Anything else, including None, falls back to X86_64.

        Example:
            >>> Architecture.from_value("arm64")
            <Architecture.ARM_64: 'arm64'>
            >>> Architecture.from_value(None)
            <Architecture.X86_64: 'x64'>
        """
        if isinstance(value, cls):
            return value
        name = value if isinstance(value, str) else getattr(value, "name", None)
        if isinstance(name, str) and name.lower() in ("arm64", "arm_64", "aarch64"):
            return cls.ARM_64
        return cls.X86_64


class LlrtBinaryType(str, Enum):
    """Which AWS SDK subset is embedded in the LLRT binary."""

    FULL_SDK = "full-sdk"
    """The LLRT bundle including the full AWS SDK"""
    NO_SDK = "no-sdk"
    """The LLRT bundle without the AWS SDK"""
    STANDARD = "standard"
    """The standard LLRT bundle, including only major AWS SDK services"""


@dataclass(frozen=True)
class CacheKey:
    """Identifies one cached bootstrap binary.

    Attributes:
        version: "latest" or a release tag such as "v0.2.0-beta"
        architecture: Target CPU architecture
        binary_type: Embedded SDK subset
    """

    version: str = DEFAULT_VERSION
    architecture: Architecture = Architecture.X86_64
    binary_type: LlrtBinaryType = LlrtBinaryType.STANDARD

    def __post_init__(self) -> None:
        check_version(self.version)

    @property
    def relative_dir(self) -> Path:
        """Cache directory relative to the cache root: <version>/<arch>/<binary type>."""
        return Path(self.version) / self.architecture.value / self.binary_type.value

    def __str__(self) -> str:
        return f"{self.version}/{self.architecture.value}/{self.binary_type.value}"


@dataclass(frozen=True)
class ResolvedVariant:
    """Where to download a binary variant and which JS target it supports."""

    binary_name: str
    url: str
    target: str
