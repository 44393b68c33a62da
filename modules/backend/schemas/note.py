"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.backend.core.utils import normalize_tags
from modules.backend.schemas.block import NoteBlock


class NoteCreate(BaseModel):
    """
    Schema for creating a new note.

    Omitting ``content`` gives the note a single empty text block.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["Research notes"],
    )
    project_id: str | None = Field(
        default=None,
        description="Owning project; omit to file the note in the inbox",
    )
    content: list[NoteBlock] | None = Field(default=None, description="Note body")
    tags: list[str] = Field(default_factory=list, description="Tag names")

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)


class NoteUpdate(BaseModel):
    """
    Schema for updating a note. Unset fields are left alone.

    Sending ``project_id: null`` moves the note back to the inbox.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    project_id: str | None = None
    content: list[NoteBlock] | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else normalize_tags(value)


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str
    user_id: str
    project_id: str | None
    title: str
    content: list[NoteBlock]
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
