"""
Shared pytest fixtures for the llrt_function test suite.

Provides fixtures for:
- Isolated storage and config locations
- Release archives built in memory
- A counting archive fetcher double
- Toolchains wired to the doubles
"""

import io
import threading
import time
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from llrt_function.cache import ArtifactCache
from llrt_function.config import LlrtSettings
from llrt_function.layers import LayerRegistry
from llrt_function.resolver import VariantResolver
from llrt_function.toolchain import LlrtToolchain

BOOTSTRAP_CONTENT = b"#!/bin/sh\necho llrt\n"


def build_archive(entries: dict[str, bytes], mode: int = 0o755) -> bytes:
    """Build a zip archive in memory with the given entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in entries.items():
            info = zipfile.ZipInfo(name)
            info.external_attr = (0o100000 | mode) << 16
            zf.writestr(info, content)
    return buffer.getvalue()


class CountingFetcher:
    """Archive fetcher double that records every URL it serves."""

    def __init__(self, payload: bytes, delay: float = 0.0, error: Exception | None = None) -> None:
        self.payload = payload
        self.delay = delay
        self.error = error
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, url: str, destination: Path) -> None:
        with self._lock:
            self.calls.append(url)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        # write in two halves so a premature reader would see a partial file
        half = len(self.payload) // 2
        with open(destination, "wb") as f:
            f.write(self.payload[:half])
            f.flush()
            if self.delay:
                time.sleep(self.delay)
            f.write(self.payload[half:])


class RecordingLayerFactory:
    """Layer factory double; returns a fresh object per call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, str, str]] = []

    def __call__(self, scope: Any, construct_id: str, content_root: str) -> Any:
        self.calls.append((scope, construct_id, content_root))
        return object()


@pytest.fixture
def mock_storage_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point LLRT_HOME and the config file at a temp directory.

    Also clears LLRT_* variables from the environment and changes into the
    temp directory so no real .env or llrt.yaml is picked up.

    Returns:
        Path to temporary storage directory
    """
    for name in (
        "LLRT_CACHE_DIR",
        "LLRT_RELEASE_BASE",
        "LLRT_DOWNLOAD_TIMEOUT",
        "LLRT_LOCK_TIMEOUT",
        "LLRT_FORCE_REFRESH",
        "LLRT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LLRT_HOME", str(tmp_path))
    monkeypatch.setenv("LLRT_CONFIG_FILE", str(tmp_path / "llrt.yaml"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def archive_bytes() -> bytes:
    """A release archive holding only a bootstrap."""
    return build_archive({"bootstrap": BOOTSTRAP_CONTENT})


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    return build_archive


@pytest.fixture
def make_fetcher() -> Callable[..., CountingFetcher]:
    return CountingFetcher


@pytest.fixture
def fetcher(archive_bytes: bytes) -> CountingFetcher:
    return CountingFetcher(archive_bytes)


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def cache(cache_root: Path, fetcher: CountingFetcher) -> ArtifactCache:
    return ArtifactCache(cache_root, VariantResolver(), fetcher, lock_timeout=5.0)


@pytest.fixture
def layer_factory() -> RecordingLayerFactory:
    return RecordingLayerFactory()


@pytest.fixture
def toolchain(
    cache_root: Path,
    fetcher: CountingFetcher,
    layer_factory: RecordingLayerFactory,
) -> LlrtToolchain:
    """Toolchain with an isolated cache, fetcher double and layer registry."""
    settings = LlrtSettings(cache_dir=str(cache_root), lock_timeout=5.0)
    return LlrtToolchain.from_settings(settings, fetcher=fetcher, layers=LayerRegistry(layer_factory))
