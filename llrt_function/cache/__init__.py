"""Artifact cache for LLRT bootstrap binaries.

Public Interface:
    - ArtifactCache: Ensures a binary variant is present on disk
    - ArchiveFetcher: Protocol for downloading release archives
    - HttpArchiveFetcher: httpx-based fetcher
"""

from .artifact_cache import ArtifactCache
from .fetcher import ArchiveFetcher
from .fetcher import HttpArchiveFetcher

__all__ = [
    "ArtifactCache",
    "ArchiveFetcher",
    "HttpArchiveFetcher",
]
