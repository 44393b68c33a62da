"""
Script Schemas.

Pydantic schemas for script API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.backend.core.utils import normalize_tags
from modules.backend.schemas.block import ScriptBlock


class ScriptCreate(BaseModel):
    """
    Schema for creating a new script.

    Omitting ``content`` gives the script a single empty text block.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Script title",
        examples=["Episode 1 intro"],
    )
    project_id: str | None = Field(
        default=None,
        description="Owning project; omit to file the script in the inbox",
    )
    content: list[ScriptBlock] | None = Field(default=None, description="Script body")
    tags: list[str] = Field(default_factory=list, description="Tag names")

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)


class ScriptUpdate(BaseModel):
    """
    Schema for updating a script. Unset fields are left alone.

    Sending ``project_id: null`` moves the script back to the inbox.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    project_id: str | None = None
    content: list[ScriptBlock] | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else normalize_tags(value)


class ScriptResponse(BaseModel):
    """Schema for script in API responses."""

    id: str
    user_id: str
    project_id: str | None
    title: str
    content: list[ScriptBlock]
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
