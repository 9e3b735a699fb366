"""Tests for the httpx archive fetcher."""

import time
from pathlib import Path

import httpx
import pytest

from llrt_function.cache import HttpArchiveFetcher
from llrt_function.errors import FetchError

ASSET_URL = "https://github.com/awslabs/llrt/releases/latest/download/llrt-lambda-x64.zip"


def fetcher_for(handler) -> HttpArchiveFetcher:
    return HttpArchiveFetcher(timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestHttpArchiveFetcher:
    def test_writes_response_body(self, tmp_path: Path) -> None:
        destination = tmp_path / "llrt.zip"
        fetcher = fetcher_for(lambda request: httpx.Response(200, content=b"zip-bytes"))

        fetcher.fetch(ASSET_URL, destination)

        assert destination.read_bytes() == b"zip-bytes"

    def test_follows_release_redirect(self, tmp_path: Path) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            if request.url.host == "github.com":
                return httpx.Response(302, headers={"Location": "https://objects.example.com/asset.zip"})
            return httpx.Response(200, content=b"redirected")

        destination = tmp_path / "llrt.zip"
        fetcher_for(handler).fetch(ASSET_URL, destination)

        assert seen == [ASSET_URL, "https://objects.example.com/asset.zip"]
        assert destination.read_bytes() == b"redirected"

    def test_non_200_raises(self, tmp_path: Path) -> None:
        fetcher = fetcher_for(lambda request: httpx.Response(404))

        with pytest.raises(FetchError, match="HTTP 404"):
            fetcher.fetch(ASSET_URL, tmp_path / "llrt.zip")

    def test_timeout_raises(self, tmp_path: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(FetchError, match="timed out after 5.0s"):
            fetcher_for(handler).fetch(ASSET_URL, tmp_path / "llrt.zip")

    def test_slow_download_hits_overall_deadline(self, tmp_path: Path) -> None:
        def slow_body():
            yield b"first-chunk"
            time.sleep(0.3)
            yield b"second-chunk"

        fetcher = HttpArchiveFetcher(
            timeout=0.1,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=slow_body())),
        )

        with pytest.raises(FetchError, match="timed out after 0.1s"):
            fetcher.fetch(ASSET_URL, tmp_path / "llrt.zip")

    def test_connection_error_raises(self, tmp_path: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        with pytest.raises(FetchError, match="ConnectError"):
            fetcher_for(handler).fetch(ASSET_URL, tmp_path / "llrt.zip")

    def test_unwritable_destination_raises(self, tmp_path: Path) -> None:
        fetcher = fetcher_for(lambda request: httpx.Response(200, content=b"zip-bytes"))

        with pytest.raises(FetchError, match="Could not write"):
            fetcher.fetch(ASSET_URL, tmp_path / "missing-dir" / "llrt.zip")
