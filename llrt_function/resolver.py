"""LLRT binary variant resolver.

Maps a (version, architecture, binary type) triple to the release asset to
download and the esbuild target the runtime can execute.

Contract:
- Inputs: Version string, architecture, binary type
- Outputs: ResolvedVariant (binary name, download URL, esbuild target)
- Side Effects: None (pure)
"""

import logging
from typing import Any

from .config.settings import DEFAULT_RELEASE_BASE
from .errors import ResolutionError
from .models import LATEST
from .models import Architecture
from .models import LlrtBinaryType
from .models import ResolvedVariant
from .models import check_version

logger = logging.getLogger(__name__)

BINARY_FAMILY = "llrt-lambda"

# From LLRT v0.2.0-beta, ES2023 is supported. esbuild emits the same code for
# es2022 and es2023 but older esbuild releases reject es2023, so es2022 is used.
MODERN_TARGET = "es2022"
LEGACY_TARGET = "es2020"
MODERN_TARGET_SINCE = "v0.2.0-beta"


class VariantResolver:
    """Resolves LLRT binary variants to release assets.

    Example:
        >>> resolver = VariantResolver()
        >>> variant = resolver.resolve("latest", Architecture.ARM_64, LlrtBinaryType.NO_SDK)
        >>> variant.binary_name
        'llrt-lambda-arm64-no-sdk'
        >>> variant.target
        'es2022'
    """

    # Asset name suffix per binary type; STANDARD has none
    BINARY_SUFFIXES = {
        LlrtBinaryType.FULL_SDK: "-full-sdk",
        LlrtBinaryType.NO_SDK: "-no-sdk",
        LlrtBinaryType.STANDARD: "",
    }

    def __init__(self, release_base: str = DEFAULT_RELEASE_BASE):
        """Initialize resolver with the release download base.

        Args:
            release_base: GitHub releases URL of the LLRT project
        """
        self.release_base = release_base.rstrip("/")

    def resolve(
        self,
        version: str = LATEST,
        architecture: Any = None,
        binary_type: Any = None,
    ) -> ResolvedVariant:
        """Resolve a binary variant.

        Args:
            version: "latest" or a release tag
            architecture: Architecture or anything Architecture.from_value accepts
            binary_type: LlrtBinaryType or its string value (default: STANDARD)

        Returns:
            ResolvedVariant for the requested triple

        Raises:
            ResolutionError: If the version is not a single release tag or the
                binary type is not a known LLRT bundle
        """
        check_version(version)
        arch = Architecture.from_value(architecture)
        kind = coerce_binary_type(binary_type)

        binary_name = self.binary_name(arch, kind)
        variant = ResolvedVariant(
            binary_name=binary_name,
            url=self.download_url(version, binary_name),
            target=self.target_for(version),
        )
        logger.debug(f"Resolved LLRT {version}/{arch.value}/{kind.value} → {variant.url}")
        return variant

    def binary_name(self, architecture: Architecture, binary_type: LlrtBinaryType) -> str:
        """Build the release asset name, e.g. ``llrt-lambda-x64-full-sdk``."""
        try:
            suffix = self.BINARY_SUFFIXES[binary_type]
        except KeyError as e:
            raise ResolutionError(f"No LLRT release asset for binary type {binary_type!r}") from e
        return f"{BINARY_FAMILY}-{architecture.value}{suffix}"

    def download_url(self, version: str, binary_name: str) -> str:
        """Build the archive URL for a binary name.

        Example:
            >>> VariantResolver().download_url("v0.1.0", "llrt-lambda-x64")
            'https://github.com/awslabs/llrt/releases/download/v0.1.0/llrt-lambda-x64.zip'
        """
        if version == LATEST:
            return f"{self.release_base}/latest/download/{binary_name}.zip"
        return f"{self.release_base}/download/{version}/{binary_name}.zip"

    @staticmethod
    def target_for(version: str) -> str:
        """Pick the esbuild target supported by an LLRT version.

        Tags are compared as plain strings, so "v0.10.0" sorts before
        "v0.2.0-beta" and gets the legacy target.
        """
        if version == LATEST or version >= MODERN_TARGET_SINCE:
            return MODERN_TARGET
        return LEGACY_TARGET


def coerce_binary_type(value: Any) -> LlrtBinaryType:
    """Coerce None, a string or an LlrtBinaryType into an LlrtBinaryType.

    Raises:
        ResolutionError: If the value names no known binary type
    """
    if value is None:
        return LlrtBinaryType.STANDARD
    try:
        return LlrtBinaryType(value)
    except ValueError as e:
        valid = ", ".join(t.value for t in LlrtBinaryType)
        raise ResolutionError(f"Unknown LLRT binary type {value!r} (expected one of: {valid})") from e
