"""
Declarative async HTTP client.

Describe a request (base URL, path, method, headers, query parameters, body
task), hand it to ``APIService`` and get back a typed ``Result``.
"""

from apiservice.core.errors import APIError, APIErrorKind
from apiservice.core.http import (
    DownloadResponse,
    HTTPClient,
    HTTPClientError,
    HTTPConnectionError,
    HTTPTimeoutError,
    HTTPTransport
)
from apiservice.core.logging import get_logger, setup_logging
from apiservice.core.result import Result
from apiservice.engines.body_engine import EncodedBody, create_multipart_body, encode_body, make_boundary
from apiservice.engines.url_engine import build_url
from apiservice.pydantic_models.request.api_request_model import APIRequest, RequestDescriptor
from apiservice.pydantic_models.request.api_task_model import APITask, JSONTask, MultipartTask
from apiservice.pydantic_models.request.http_enums import ContentType, HTTPHeaderField, HTTPMethod
from apiservice.pydantic_models.request.multipart_data_model import MultipartData
from apiservice.services.api_service import APIService

__all__ = [
    "APIError",
    "APIErrorKind",
    "APIRequest",
    "APIService",
    "APITask",
    "ContentType",
    "DownloadResponse",
    "EncodedBody",
    "HTTPClient",
    "HTTPClientError",
    "HTTPConnectionError",
    "HTTPHeaderField",
    "HTTPMethod",
    "HTTPTimeoutError",
    "HTTPTransport",
    "JSONTask",
    "MultipartData",
    "MultipartTask",
    "RequestDescriptor",
    "Result",
    "build_url",
    "create_multipart_body",
    "encode_body",
    "get_logger",
    "make_boundary",
    "setup_logging",
]
