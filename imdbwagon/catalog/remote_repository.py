"""Byte-stream access to the remote dump mirror.

Supports ``ftp://`` (anonymous by default), ``http(s)://`` and ``file://``
URLs. Transient failures are retried with exponential backoff; anything that
still fails is raised as NetworkError.
"""
import ftplib
from io import BytesIO
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import requests

from imdbwagon.exceptions import NetworkError
from imdbwagon.logging_config import get_logger
from imdbwagon.utils.retry import retry_with_exponential_backoff

logger = get_logger(__name__)

TRANSIENT_EXCEPTIONS = (
    requests.ConnectionError,
    requests.Timeout,
    ftplib.error_temp,
    ConnectionError,
    TimeoutError,
    EOFError,
)

# ftplib.all_errors already includes OSError, which covers file:// reads
REMOTE_ERRORS = (requests.RequestException,) + ftplib.all_errors

PARTIAL_SUFFIX = ".part"


class RemoteRepository:
    """Fetches manifests and dump files from a mirror.

    Attributes:
        timeout: Socket timeout in seconds for each connection
        chunk_size: Block size used when streaming file contents
    """

    def __init__(self, timeout: float = 60.0, chunk_size: int = 1024 * 1024) -> None:
        self.timeout = timeout
        self.chunk_size = chunk_size

    def read_text(self, url: str, encoding: str = "utf-8") -> str:
        """Fetch a small text resource such as the manifest.

        Raises:
            NetworkError: If the resource cannot be fetched
        """
        try:
            buffer = self._read_once(url)
        except REMOTE_ERRORS as e:
            raise NetworkError(f"Unable to fetch {url}: {e}") from e
        return buffer.decode(encoding, errors="replace")

    def download(self, url: str, destination: Path) -> int:
        """Stream ``url`` into ``destination`` and return the byte count.

        The transfer is written to ``<destination>.part`` and only renamed once
        complete, so an interrupted download never looks finished.

        Raises:
            NetworkError: If the file cannot be fetched
        """
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            size = self._download_once(url, partial)
        except REMOTE_ERRORS as e:
            partial.unlink(missing_ok=True)
            raise NetworkError(f"Unable to download {url}: {e}") from e
        except NetworkError:
            partial.unlink(missing_ok=True)
            raise

        partial.replace(destination)
        logger.info(f"Downloaded {url} ({size} bytes)")
        return size

    @retry_with_exponential_backoff(max_retries=3, exceptions=TRANSIENT_EXCEPTIONS)
    def _read_once(self, url: str) -> bytes:
        buffer = BytesIO()
        self._stream(url, buffer.write)
        return buffer.getvalue()

    @retry_with_exponential_backoff(max_retries=3, exceptions=TRANSIENT_EXCEPTIONS)
    def _download_once(self, url: str, partial: Path) -> int:
        with open(partial, "wb") as file_handle:
            return self._stream(url, file_handle.write)

    def _stream(self, url: str, write: Callable[[bytes], object]) -> int:
        scheme = urlparse(url).scheme.lower()
        if scheme == "ftp":
            return self._stream_ftp(url, write)
        if scheme in ("http", "https"):
            return self._stream_http(url, write)
        if scheme == "file":
            return self._stream_file(url, write)
        raise NetworkError(f"Unsupported URL scheme '{scheme}' in {url}")

    def _stream_ftp(self, url: str, write: Callable[[bytes], object]) -> int:
        parsed = urlparse(url)
        received = 0

        def counting_write(block: bytes) -> None:
            nonlocal received
            write(block)
            received += len(block)

        with ftplib.FTP(timeout=self.timeout) as ftp:
            ftp.connect(parsed.hostname or "", parsed.port or 21)
            ftp.login(parsed.username or "anonymous", parsed.password or "anonymous@")
            logger.debug(f"RETR {parsed.path} from {parsed.hostname}")
            ftp.retrbinary(f"RETR {unquote(parsed.path)}", counting_write, blocksize=self.chunk_size)

        return received

    def _stream_http(self, url: str, write: Callable[[bytes], object]) -> int:
        received = 0
        with requests.get(url, stream=True, timeout=self.timeout) as response:
            response.raise_for_status()
            for chunk in response.iter_content(chunk_size=self.chunk_size):
                if chunk:
                    write(chunk)
                    received += len(chunk)
        return received

    def _stream_file(self, url: str, write: Callable[[bytes], object]) -> int:
        received = 0
        with open(url2pathname(urlparse(url).path), "rb") as source:
            for chunk in iter(lambda: source.read(self.chunk_size), b""):
                write(chunk)
                received += len(chunk)
        return received
