from typing import Dict, Mapping, Optional, Protocol, Union, runtime_checkable
from pydantic import BaseModel, ConfigDict, Field

from .api_task_model import APITask, JSONTask, MultipartTask
from .http_enums import HTTPMethod


@runtime_checkable
class APIRequest(Protocol):
    """
    Anything that describes one HTTP call.

    Endpoint catalogs can be plain classes, enums or models, as long as they
    expose these attributes:

    - base_url: absolute origin, e.g. ``https://api.example.com/v1``
    - path: appended to ``base_url`` as a path component
    - method: HTTPMethod (or its string value)
    - headers: headers to send, or None
    - query_params: query parameters, or None
    - task: JSONTask / MultipartTask body, or None
    """

    base_url: str
    path: str
    method: Union[HTTPMethod, str]
    headers: Optional[Mapping[str, str]]
    query_params: Optional[Mapping[str, str]]
    task: Optional[Union[JSONTask, MultipartTask]]


class RequestDescriptor(BaseModel):
    """Ready-made immutable ``APIRequest``."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., description="Absolute origin the path is appended to")
    path: str = Field("", description="Path appended to base_url")
    method: HTTPMethod = Field(HTTPMethod.GET, description="HTTP method")
    headers: Optional[Dict[str, str]] = Field(None, description="Headers, keys kept as given")
    query_params: Optional[Dict[str, str]] = Field(None, description="Query parameters, order irrelevant")
    task: Optional[APITask] = Field(None, description="Request body task")
