"""HTTP downloads with a bounded wait."""

import time
from typing import BinaryIO, Callable, Optional

import httpx
from loguru import logger

from arc_updater.services.exceptions import DownloadError


class DownloadClient:
    """
    Blocking downloader used by the checksum and assembly services.

    Each download must finish within ``timeout`` seconds overall. Running out
    of time is reported exactly like a transport failure.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timeout = timeout
        self.transport = transport
        self.clock = clock

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport,
            follow_redirects=True,
        )

    def fetch_bytes(self, url: str) -> bytes:
        """
        Download a small resource into memory.

        Raises:
            DownloadError: On timeout, transport error or error status
        """
        buffer = bytearray()
        with self._client() as client:
            self._stream(client, url, buffer.extend)
        return bytes(buffer)

    def download_to(self, url: str, destination: BinaryIO) -> int:
        """
        Stream a resource into ``destination``.

        Whatever was written before a failure must be discarded by the caller.

        Returns:
            Number of bytes written

        Raises:
            DownloadError: On timeout, transport error or error status
        """
        written = 0

        def write(chunk: bytes) -> None:
            nonlocal written
            destination.write(chunk)
            written += len(chunk)

        with self._client() as client:
            self._stream(client, url, write)
        return written

    def _stream(self, client: httpx.Client, url: str, sink: Callable[[bytes], None]) -> None:
        deadline = self.clock() + self.timeout
        logger.debug(f"Downloading {url}")
        try:
            with client.stream("GET", url) as response:
                self._check_deadline(deadline, url)
                response.raise_for_status()
                for chunk in response.iter_bytes():
                    self._check_deadline(deadline, url)
                    sink(chunk)
        except httpx.HTTPError as e:
            logger.warning(f"Download of {url} failed: {e}")
            raise DownloadError(f"Download of {url} failed: {e}") from e

    def _check_deadline(self, deadline: float, url: str) -> None:
        if self.clock() > deadline:
            raise DownloadError(f"Download of {url} exceeded {self.timeout:g} seconds")
