"""On-disk cache of LLRT bootstrap binaries.

Layout: ``<root>/<version>/<arch>/<binary type>/bootstrap``. A present
bootstrap is trusted as-is; nothing is re-validated and nothing is evicted.

Contract:
- Inputs: CacheKey
- Outputs: Path to the bootstrap binary
- Side Effects: Downloads and extracts release archives on cache miss

Population is serialized per key: an in-process lock per key plus a
``filelock.FileLock`` next to the cache directory for other processes.
The archive is extracted into a temporary sibling directory and ``bootstrap``
is renamed into place last, so a reader never sees a partial binary.
"""

import logging
import os
import shutil
import stat
import threading
import uuid
import zipfile
from pathlib import Path
from pathlib import PurePosixPath

from filelock import FileLock
from filelock import Timeout

from ..errors import ExtractionError
from ..errors import FetchError
from ..errors import LlrtError
from ..models import CacheKey
from ..resolver import VariantResolver
from .fetcher import ArchiveFetcher

logger = logging.getLogger(__name__)

BINARY_NAME = "bootstrap"


class ArtifactCache:
    """Maps cache keys to local bootstrap binaries, fetching each at most once.

    Example:
        >>> cache = ArtifactCache(Path(".tmp/llrt"), VariantResolver(), HttpArchiveFetcher())
        >>> cache.ensure(CacheKey("latest", Architecture.ARM_64, LlrtBinaryType.STANDARD))
        PosixPath('.../.tmp/llrt/latest/arm64/standard/bootstrap')
    """

    _ARCHIVE_NAME = "llrt_temp.zip"

    def __init__(
        self,
        root: Path,
        resolver: VariantResolver,
        fetcher: ArchiveFetcher,
        lock_timeout: float = 300.0,
        force_refresh: bool = False,
    ) -> None:
        """Initialize cache.

        Args:
            root: Cache root directory
            resolver: Resolver used to find the archive URL of a key
            fetcher: Downloads archives
            lock_timeout: Seconds to wait for another process populating the same key
            force_refresh: Re-fetch present binaries once per key for this cache instance
        """
        self.root = Path(root)
        self.resolver = resolver
        self.fetcher = fetcher
        self.lock_timeout = lock_timeout
        self.force_refresh = force_refresh
        self.fetch_count = 0

        self._key_locks: dict[CacheKey, threading.Lock] = {}
        self._key_locks_guard = threading.Lock()
        self._refreshed: set[CacheKey] = set()

        logger.debug(f"ArtifactCache initialized with root={self.root}, force_refresh={self.force_refresh}")

    def cache_dir(self, key: CacheKey) -> Path:
        """Directory holding the extracted payload for a key."""
        return self.root / key.relative_dir

    def binary_path(self, key: CacheKey) -> Path:
        """Path of the bootstrap binary for a key (it may not exist yet)."""
        return self.cache_dir(key) / BINARY_NAME

    def is_cached(self, key: CacheKey) -> bool:
        return self.binary_path(key).exists()

    def ensure(self, key: CacheKey) -> Path:
        """Return the bootstrap path for ``key``, fetching it first if needed.

        Args:
            key: Binary variant to make available

        Returns:
            Path to the extracted bootstrap binary

        Raises:
            FetchError: If the archive can't be downloaded, is corrupt, or the
                cache lock can't be acquired within lock_timeout
            ExtractionError: If the archive has no bootstrap entry
        """
        binary = self.binary_path(key)
        if self._is_ready(key, binary):
            logger.debug(f"LLRT cache hit for {key}: {binary}")
            return binary

        cache_dir = self.cache_dir(key)
        with self._lock_for(key):
            cache_dir.parent.mkdir(parents=True, exist_ok=True)
            lock_path = cache_dir.parent / f"{cache_dir.name}.lock"
            try:
                with FileLock(lock_path, timeout=self.lock_timeout):
                    # Double-check after acquiring lock (another process may have fetched it)
                    if self._is_ready(key, binary):
                        logger.debug(f"LLRT binary for {key} populated by another build: {binary}")
                    else:
                        self._populate(key, cache_dir)
            except Timeout as e:
                raise FetchError(
                    f"Timed out after {self.lock_timeout}s waiting for cache lock {lock_path} (cache key {key})"
                ) from e
            self._refreshed.add(key)

        return binary

    def _is_ready(self, key: CacheKey, binary: Path) -> bool:
        if self.force_refresh and key not in self._refreshed:
            return False
        return binary.exists()

    def _lock_for(self, key: CacheKey) -> threading.Lock:
        with self._key_locks_guard:
            return self._key_locks.setdefault(key, threading.Lock())

    def _populate(self, key: CacheKey, cache_dir: Path) -> None:
        """Download, extract and install the payload for ``key``.

        Must be called with the key's locks held.
        """
        variant = self.resolver.resolve(key.version, key.architecture, key.binary_type)
        staging = cache_dir.parent / f".{cache_dir.name}.tmp_{uuid.uuid4().hex[:8]}"
        staging.mkdir(parents=True)

        try:
            archive = staging / self._ARCHIVE_NAME
            logger.info(f"Fetching LLRT {key} from {variant.url}")
            try:
                self.fetcher.fetch(variant.url, archive)
            except LlrtError:
                raise
            except Exception as e:
                raise FetchError(f"Failed to fetch LLRT {key} from {variant.url}: {type(e).__name__}: {e}") from e

            payload = staging / "payload"
            self._extract(key, archive, payload)
            try:
                self._install(payload, cache_dir)
            except OSError as e:
                raise ExtractionError(f"Failed to install LLRT {key} into {cache_dir}: {e}") from e
            with self._key_locks_guard:
                self.fetch_count += 1
            logger.info(f"Cached LLRT {key} at {cache_dir / BINARY_NAME}")
        finally:
            shutil.rmtree(staging, ignore_errors=True)

    def _extract(self, key: CacheKey, archive: Path, payload: Path) -> None:
        """Extract ``archive`` into ``payload`` and mark bootstrap executable."""
        payload.mkdir()
        payload_root = payload.resolve()

        try:
            with zipfile.ZipFile(archive) as zf:
                members = zf.infolist()
                names = {str(PurePosixPath(m.filename)) for m in members if not m.is_dir()}
                if BINARY_NAME not in names:
                    raise ExtractionError(
                        f"Archive for LLRT {key} has no '{BINARY_NAME}' entry "
                        f"(found: {', '.join(sorted(names)) or 'nothing'})"
                    )

                for member in members:
                    target = (payload / member.filename).resolve()
                    if not target.is_relative_to(payload_root):
                        raise ExtractionError(
                            f"Archive entry '{member.filename}' for LLRT {key} escapes the cache directory"
                        )
                    zf.extract(member, payload)

                    mode = (member.external_attr >> 16) & 0o777
                    if mode and not member.is_dir():
                        target.chmod(mode)
        except zipfile.BadZipFile as e:
            raise FetchError(f"Downloaded archive for LLRT {key} is corrupt: {e}") from e
        except OSError as e:
            raise ExtractionError(f"Failed to extract archive for LLRT {key}: {e}") from e

        bootstrap = payload / BINARY_NAME
        bootstrap.chmod(bootstrap.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def _install(self, payload: Path, cache_dir: Path) -> None:
        """Move extracted files into ``cache_dir``; bootstrap goes last."""
        cache_dir.mkdir(parents=True, exist_ok=True)

        for entry in payload.iterdir():
            if entry.name == BINARY_NAME:
                continue
            destination = cache_dir / entry.name
            if destination.is_dir() and not destination.is_symlink():
                shutil.rmtree(destination)
            os.replace(entry, destination)

        os.replace(payload / BINARY_NAME, cache_dir / BINARY_NAME)
