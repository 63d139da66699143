"""
Request body encoding.

Turns a body task into the extra headers it needs and the raw payload bytes.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic_core import PydanticSerializationError, to_json

from apiservice.core import config
from apiservice.core.errors import APIError
from apiservice.core.logging import get_logger
from apiservice.pydantic_models.request.api_task_model import JSONTask, MultipartTask
from apiservice.pydantic_models.request.http_enums import ContentType, HTTPHeaderField
from apiservice.pydantic_models.request.multipart_data_model import MultipartData

logger = get_logger(__name__)

CRLF = "\r\n"


@dataclass
class EncodedBody:
    """Extra headers plus payload produced for one request."""
    headers: Dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None


def make_boundary(prefix: str = None) -> str:
    """Return a boundary token unique to one request."""
    if prefix is None:
        prefix = config.APISERVICE_BOUNDARY_PREFIX
    return f"{prefix}{str(uuid.uuid4()).upper()}"


def encode_json(value: Any) -> bytes:
    """
    Serialize ``value`` to a UTF-8 JSON document.

    Raises:
        APIError: JSON_CONVERSION_FAILURE if the value is not serializable
    """
    try:
        return to_json(value)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        logger.warning(f"Could not serialize request body of type {type(value).__name__}: {e}")
        raise APIError.json_conversion_failure(original_error=e) from e


def create_multipart_body(parts: List[MultipartData], boundary: str) -> bytes:
    """
    Encode parts as multipart/form-data, preserving their order.

    Each part is written as:

        --<boundary>
        Content-Disposition: form-data; name="<name>"[; filename="<file_name>"]
        Content-Type: <mime_type>
        <blank line>
        <data>

    and the body ends with ``--<boundary>--`` (no trailing CRLF).

    Args:
        parts: Ordered parts
        boundary: Boundary token, without the leading dashes

    Returns:
        Encoded body bytes
    """
    body = bytearray()

    for part in parts:
        body += f"--{boundary}{CRLF}".encode("utf-8")
        disposition = f'Content-Disposition: form-data; name="{part.name}"'
        if part.file_name is not None:
            disposition += f'; filename="{part.file_name}"'
        body += f"{disposition}{CRLF}".encode("utf-8")
        body += f"Content-Type: {part.mime_type}{CRLF}{CRLF}".encode("utf-8")
        body += part.data
        body += CRLF.encode("utf-8")

    body += f"--{boundary}--".encode("utf-8")
    return bytes(body)


def encode_body(task, boundary: str = None) -> EncodedBody:
    """
    Encode an optional body task.

    Args:
        task: JSONTask, MultipartTask or None
        boundary: Multipart boundary to use instead of a fresh one (optional)

    Returns:
        EncodedBody with the headers to add and the payload

    Raises:
        APIError: JSON_CONVERSION_FAILURE if a JSON value cannot be serialized
    """
    if task is None:
        return EncodedBody()

    if isinstance(task, JSONTask):
        return EncodedBody(
            headers={HTTPHeaderField.CONTENT_TYPE.value: ContentType.JSON.value},
            content=encode_json(task.value)
        )

    if isinstance(task, MultipartTask):
        boundary = boundary or make_boundary()
        return EncodedBody(
            headers={
                HTTPHeaderField.CONTENT_TYPE.value:
                    f"{ContentType.MULTIPART_FORM_DATA.value}; boundary={boundary}"
            },
            content=create_multipart_body(task.parts, boundary)
        )

    raise TypeError(f"Unsupported body task: {type(task).__name__}")
