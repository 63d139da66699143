"""
Error taxonomy for API calls.

Every failure of a call is reported as exactly one ``APIError`` whose ``kind``
belongs to a closed set, plus the ``OTHER`` escape hatch that carries a
free-form diagnostic message.
"""

from enum import Enum
from typing import Optional


class APIErrorKind(str, Enum):
    """Closed set of error kinds a call can finish with."""

    REQUEST_FAILED = "request_failed"
    JSON_CONVERSION_FAILURE = "json_conversion_failure"
    INVALID_DATA = "invalid_data"
    RESPONSE_UNSUCCESSFUL = "response_unsuccessful"
    JSON_PARSING_FAILURE = "json_parsing_failure"
    OTHER = "other"


_DESCRIPTIONS = {
    APIErrorKind.REQUEST_FAILED: "Request Failed",
    APIErrorKind.JSON_CONVERSION_FAILURE: "JSON Conversion Failure",
    APIErrorKind.INVALID_DATA: "Invalid Data",
    APIErrorKind.RESPONSE_UNSUCCESSFUL: "Response Unsuccessful",
    APIErrorKind.JSON_PARSING_FAILURE: "JSON Parsing Failure",
}


class APIError(Exception):
    """
    Error delivered to the caller when a call does not succeed.

    Callers are expected to branch on ``kind``. For ``APIErrorKind.OTHER`` the
    message is diagnostic text and should not be pattern-matched.
    """

    def __init__(
        self,
        kind: APIErrorKind,
        message: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        """
        Initialize API error.

        Args:
            kind: Classification of the failure
            message: Human-readable description (defaults to the kind's description)
            url: The URL that was being accessed (optional)
            status_code: HTTP status code if applicable (optional)
            original_error: The underlying exception that caused this error (optional)
        """
        self.kind = kind
        self.message = message or _DESCRIPTIONS.get(kind, "Unknown Error")
        self.url = url
        self.status_code = status_code
        self.original_error = original_error

        super().__init__(self.message)

    @property
    def description(self) -> str:
        """Localized-style description: the fixed label, or the message for OTHER."""
        if self.kind is APIErrorKind.OTHER:
            return self.message
        return _DESCRIPTIONS[self.kind]

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)

    def __repr__(self) -> str:
        return f"APIError(kind={self.kind.name}, message={self.message!r})"

    @classmethod
    def request_failed(cls, url: str = None, status_code: int = None) -> "APIError":
        return cls(APIErrorKind.REQUEST_FAILED, url=url, status_code=status_code)

    @classmethod
    def json_conversion_failure(cls, original_error: Exception = None) -> "APIError":
        return cls(APIErrorKind.JSON_CONVERSION_FAILURE, original_error=original_error)

    @classmethod
    def invalid_data(cls, url: str = None) -> "APIError":
        return cls(APIErrorKind.INVALID_DATA, url=url)

    @classmethod
    def response_unsuccessful(cls, url: str = None) -> "APIError":
        return cls(APIErrorKind.RESPONSE_UNSUCCESSFUL, url=url)

    @classmethod
    def json_parsing_failure(cls, url: str = None, original_error: Exception = None) -> "APIError":
        return cls(APIErrorKind.JSON_PARSING_FAILURE, url=url, original_error=original_error)

    @classmethod
    def other(cls, message: str, url: str = None, original_error: Exception = None) -> "APIError":
        return cls(APIErrorKind.OTHER, message=message, url=url, original_error=original_error)
