from enum import Enum


class HTTPMethod(str, Enum):
    """HTTP methods a request descriptor may use."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class HTTPHeaderField(str, Enum):
    """Common HTTP header names."""
    AUTHENTICATION = "Authentication"
    CONTENT_TYPE = "Content-Type"
    ACCEPT_TYPE = "Accept"
    ACCEPT_ENCODING = "Accept-Encoding"
    AUTHORIZATION = "Authorization"
    ACCEPT_LANGUAGE = "Accept-Language"
    USER_AGENT = "User-Agent"


class ContentType(str, Enum):
    """Common content types."""
    JSON = "application/json"
    X_WWW_FORM_URLENCODED = "application/x-www-form-urlencoded"
    MULTIPART_FORM_DATA = "multipart/form-data"
