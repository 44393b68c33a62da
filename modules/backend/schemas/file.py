"""
File Schemas.

Pydantic schemas for upload slots and image inspirations.
"""

from pydantic import BaseModel, Field, field_validator

from modules.backend.core.utils import normalize_tags
from modules.backend.schemas.inspiration import InspirationResponse


class UploadUrlResponse(BaseModel):
    """Short-lived target for a single blob upload."""

    upload_url: str
    storage_id: str


class UploadResult(BaseModel):
    """Returned by the upload target once bytes are stored."""

    storage_id: str
    size: int
    content_type: str | None


class ImageMetadata(BaseModel):
    """Client-reported details about an uploaded image."""

    filename: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    mime_type: str | None = None
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)


class ImageInspirationCreate(BaseModel):
    """Schema for registering an uploaded image as an inspiration."""

    file_id: str = Field(..., min_length=1, description="Storage id from the upload")
    title: str = Field(..., min_length=1, max_length=255)
    project_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    metadata: ImageMetadata = Field(default_factory=ImageMetadata)

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)


class FileUrlResponse(BaseModel):
    """Retrieval URL for a blob, or None when it does not exist."""

    url: str | None


class ImageWithUrl(InspirationResponse):
    """Image inspiration with its retrieval URL resolved."""

    file_url: str | None = None
