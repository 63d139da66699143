from typing import Annotated, Any, List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from .multipart_data_model import MultipartData


class JSONTask(BaseModel):
    """Send ``value`` as a JSON document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["json"] = "json"
    value: Any = Field(..., description="Any value pydantic can serialize to JSON")


class MultipartTask(BaseModel):
    """Send ``parts`` as a multipart/form-data body, in order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["multipart"] = "multipart"
    parts: List[MultipartData] = Field(..., description="Ordered multipart parts")


APITask = Annotated[Union[JSONTask, MultipartTask], Field(discriminator="kind")]
