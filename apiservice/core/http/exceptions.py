"""
Custom exceptions for HTTP transport operations.

These are raised by the transport layer only. The request executor converts
every one of them into an ``APIError`` of kind ``OTHER`` before it reaches
the caller.
"""

from typing import Optional


class HTTPClientError(Exception):
    """
    Base exception for all HTTP transport errors.

    Catch this to handle any transport failure generically.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """
        Initialize HTTP client error.

        Args:
            message: Human-readable error description
            url: The URL that was being accessed (optional)
            original_error: The underlying exception that caused this error (optional)
        """
        self.message = message
        self.url = url
        self.original_error = original_error

        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        return " | ".join(parts)


class HTTPConnectionError(HTTPClientError):
    """
    Exception raised when connection to the server fails.

    This includes DNS resolution failures, connection refused errors,
    protocol errors, etc.
    """
    pass


class HTTPTimeoutError(HTTPClientError):
    """
    Exception raised when a request times out.
    """
    pass
