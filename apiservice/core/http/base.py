from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional


@dataclass
class DownloadResponse:
    """What a transport hands back after a streamed download."""
    response: Any
    temp_path: Optional[Path]


class HTTPTransport(ABC):
    """
    Abstract base class for the HTTP stack used by ``APIService``.

    The service never talks to the network itself; it delegates to whichever
    transport it was constructed with, so tests and callers can substitute
    their own without touching global state.
    """

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        content: Optional[bytes] = None
    ) -> Any:
        """
        Issue one buffered request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: Fully resolved URL
            headers: Headers to send
            content: Raw request body (optional)

        Returns:
            The response object, normally an ``httpx.Response``

        Raises:
            HTTPClientError: If no response could be obtained
        """
        pass

    @abstractmethod
    async def download(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str]
    ) -> DownloadResponse:
        """
        Issue one request and stream its body to a temporary file.

        Args:
            method: HTTP method
            url: Fully resolved URL
            headers: Headers to send

        Returns:
            DownloadResponse with the response and the temp file location.
            ``temp_path`` is ``None`` when nothing was written.

        Raises:
            HTTPClientError: If no response could be obtained
        """
        pass
