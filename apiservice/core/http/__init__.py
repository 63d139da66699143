"""
HTTP transport layer.

This module provides the transport abstraction the request executor talks
to, its default httpx implementation, and transport exceptions.
"""

from apiservice.core.http.base import DownloadResponse, HTTPTransport
from apiservice.core.http.client import HTTPClient
from apiservice.core.http.exceptions import (
    HTTPClientError,
    HTTPConnectionError,
    HTTPTimeoutError
)

__all__ = [
    "DownloadResponse",
    "HTTPTransport",
    "HTTPClient",
    "HTTPClientError",
    "HTTPConnectionError",
    "HTTPTimeoutError",
]
