"""Release archive download.

Contract:
- Inputs: Archive URL, destination file
- Outputs: Archive written to destination
- Side Effects: Network access
"""

import logging
import time
from pathlib import Path
from typing import Protocol

import httpx

from ..errors import FetchError

logger = logging.getLogger(__name__)


class ArchiveFetcher(Protocol):
    """Downloads one archive to a local file."""

    def fetch(self, url: str, destination: Path) -> None: ...


class HttpArchiveFetcher:
    """Streams release archives over HTTP(S).

    GitHub serves release assets through a redirect, so redirects are followed.
    ``timeout`` bounds each network operation and the download as a whole.
    """

    def __init__(self, timeout: float = 60.0, transport: httpx.BaseTransport | None = None) -> None:
        """Initialize fetcher.

        Args:
            timeout: Seconds before the download fails with FetchError
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.timeout = timeout
        self.transport = transport

    def fetch(self, url: str, destination: Path) -> None:
        """Download ``url`` into ``destination``.

        Raises:
            FetchError: On timeout, transport failure or a non-200 response
        """
        logger.info(f"Downloading {url}")
        deadline = time.monotonic() + self.timeout
        written = 0

        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self.transport) as client:
                with client.stream("GET", url) as response:
                    if response.status_code != 200:
                        raise FetchError(f"Download failed for {url}: HTTP {response.status_code}")

                    with open(destination, "wb") as f:
                        for chunk in response.iter_bytes():
                            if time.monotonic() > deadline:
                                raise FetchError(f"Download of {url} timed out after {self.timeout}s")
                            f.write(chunk)
                            written += len(chunk)
        except FetchError:
            raise
        except httpx.TimeoutException as e:
            raise FetchError(f"Download of {url} timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Download failed for {url}: {type(e).__name__}: {e}") from e
        except OSError as e:
            raise FetchError(f"Could not write {destination} while downloading {url}: {e}") from e

        logger.debug(f"Downloaded {written} bytes from {url}")
