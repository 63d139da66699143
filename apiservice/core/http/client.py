"""
HTTP transport built on top of httpx.

This module provides the default ``HTTPTransport`` used by ``APIService``:
buffered requests and downloads streamed to a temporary file.
"""

import asyncio
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Mapping, Optional

import httpx

from apiservice.core import config
from apiservice.core.http.base import DownloadResponse, HTTPTransport
from apiservice.core.http.exceptions import (
    HTTPClientError,
    HTTPConnectionError,
    HTTPTimeoutError
)
from apiservice.core.logging import get_logger

logger = get_logger(__name__)


class HTTPClient(HTTPTransport):
    """
    Async HTTP transport for issuing requests through httpx.

    This client provides:
    - Consistent error handling (httpx errors wrapped as HTTPClientError subclasses)
    - Configurable timeouts
    - Downloads streamed straight to disk

    Status codes are NOT checked here; classification belongs to the caller.

    A caller-supplied ``httpx.AsyncClient`` is used as-is and stays owned by
    the caller. Without one, a short-lived client is opened per request.

    Example:
        ```python
        async with HTTPClient() as transport:
            response = await transport.send("GET", "https://api.example.com/data", {})
        ```
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        default_timeout: float = None,
        download_dir: Optional[str] = None,
        chunk_size: int = None
    ):
        """
        Initialize HTTP client.

        Args:
            client: Shared httpx.AsyncClient to issue requests with (optional)
            default_timeout: Timeout in seconds for clients created here
            download_dir: Directory for temporary download files (system temp if not set)
            chunk_size: Read size in bytes when streaming downloads
        """
        self._client = client
        self._owns_client = False
        self.default_timeout = default_timeout if default_timeout is not None else config.APISERVICE_TIMEOUT
        self.download_dir = download_dir or config.APISERVICE_DOWNLOAD_DIR
        self.chunk_size = chunk_size or config.APISERVICE_DOWNLOAD_CHUNK_SIZE

    async def __aenter__(self) -> "HTTPClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.default_timeout)
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
        else:
            async with httpx.AsyncClient(timeout=self.default_timeout) as client:
                yield client

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        content: Optional[bytes] = None
    ) -> httpx.Response:
        """
        Make an async buffered request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: The URL to request
            headers: HTTP headers to send
            content: Raw request body (optional)

        Returns:
            httpx.Response object, whatever its status code

        Raises:
            HTTPConnectionError: If connection fails
            HTTPTimeoutError: If request times out
            HTTPClientError: For any other transport failure
        """
        try:
            async with self._session() as client:
                return await client.request(method, url, headers=dict(headers), content=content)
        except Exception as e:
            raise self._wrap_error(e, method, url)

    async def download(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str]
    ) -> DownloadResponse:
        """
        Make an async request and stream a successful body to a temporary file.

        The body is only written for 2xx responses; other responses come back
        with ``temp_path=None``.

        Args:
            method: HTTP method
            url: The URL to request
            headers: HTTP headers to send

        Returns:
            DownloadResponse holding the httpx.Response and the temp file path

        Raises:
            HTTPConnectionError: If connection fails or the stream breaks
            HTTPTimeoutError: If request times out
            HTTPClientError: For any other transport failure
        """
        temp_path = None
        try:
            async with self._session() as client:
                async with client.stream(method, url, headers=dict(headers)) as response:
                    if response.is_success:
                        temp_path = await self._write_temp_file(response)
                    return DownloadResponse(response=response, temp_path=temp_path)
        except Exception as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            raise self._wrap_error(e, method, url)

    async def _write_temp_file(self, response: httpx.Response) -> Path:
        fd, name = tempfile.mkstemp(prefix="apiservice-", suffix=".download", dir=self.download_dir)
        temp_path = Path(name)
        try:
            with os.fdopen(fd, "wb") as file:
                async for chunk in response.aiter_bytes(self.chunk_size):
                    await asyncio.to_thread(file.write, chunk)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Streamed response body to {temp_path}")
        return temp_path

    def _wrap_error(self, error: Exception, method: str, url: str) -> HTTPClientError:
        if isinstance(error, HTTPClientError):
            return error

        if isinstance(error, httpx.TimeoutException):
            return HTTPTimeoutError(
                message=f"Request to {url} timed out after {self.default_timeout}s",
                url=url,
                original_error=error
            )

        if isinstance(error, httpx.RequestError):
            return HTTPConnectionError(
                message=f"Connection failed for {method} {url}: {str(error)}",
                url=url,
                original_error=error
            )

        return HTTPClientError(
            message=f"Unexpected error during {method} {url}: {str(error)}",
            url=url,
            original_error=error
        )
