from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Characters that would break out of a quoted Content-Disposition parameter
HEADER_UNSAFE_CHARS = ('\r', '\n', '"')


class MultipartData(BaseModel):
    """One part of a multipart/form-data body."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Form field name")
    file_name: Optional[str] = Field(None, description="Filename reported for the part, if any")
    data: bytes = Field(..., description="Raw part payload")
    mime_type: str = Field(..., description="Content-Type of the part")

    @field_validator("name", "file_name")
    @classmethod
    def reject_header_unsafe_chars(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and any(char in value for char in HEADER_UNSAFE_CHARS):
            raise ValueError("must not contain CR, LF or double quotes")
        return value
