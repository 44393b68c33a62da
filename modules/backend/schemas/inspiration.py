"""
Inspiration Schemas.

Pydantic schemas for inspiration API request/response validation.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from modules.backend.core.utils import normalize_tags

InspirationType = Literal["link", "image", "file"]


class InspirationCreate(BaseModel):
    """
    Schema for creating an inspiration.

    Link metadata (domain, platform, thumbnail) is derived from ``url``
    on the server; clients do not send it.
    """

    title: str = Field(..., min_length=1, max_length=255, examples=["Editing reference"])
    type: InspirationType = Field(description="Inspiration kind")
    url: str | None = Field(
        default=None,
        max_length=2048,
        examples=["https://www.youtube.com/watch?v=dQw4w9WgXcQ"],
    )
    project_id: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)


class InspirationUpdate(BaseModel):
    """Schema for updating an inspiration. Unset fields are left alone."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    project_id: str | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else normalize_tags(value)


class InspirationResponse(BaseModel):
    """Schema for inspiration in API responses."""

    id: str
    user_id: str
    project_id: str | None
    type: InspirationType
    title: str
    url: str | None
    file_id: str | None
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("metadata_", "metadata"),
    )
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
