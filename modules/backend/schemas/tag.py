"""
Tag Schemas.

Pydantic schemas for the tag registry and item tagging.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.backend.core.utils import normalize_tag_name
from modules.backend.schemas.inspiration import InspirationResponse
from modules.backend.schemas.note import NoteResponse
from modules.backend.schemas.project import ProjectResponse
from modules.backend.schemas.script import ScriptResponse


class ItemType(str, Enum):
    """Content tables that carry a tags array."""

    PROJECTS = "projects"
    SCRIPTS = "scripts"
    NOTES = "notes"
    INSPIRATIONS = "inspirations"


class TagCreate(BaseModel):
    """Create a tag, or recolor it if the name already exists."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Tutorial"])
    color: str | None = Field(default=None, max_length=32, examples=["#f97316"])

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        name = normalize_tag_name(value)
        if not name:
            raise ValueError("Tag name must not be blank")
        return name


class TagAssign(BaseModel):
    """Tag name to attach to a content item."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        name = normalize_tag_name(value)
        if not name:
            raise ValueError("Tag name must not be blank")
        return name


class TagResponse(BaseModel):
    """Schema for tag in API responses."""

    id: str
    user_id: str
    name: str
    color: str | None
    usage_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TagUsageResponse(TagResponse):
    """Tag with its scan-based usage next to the stored counter."""

    actual_usage_count: int


class ContentByTagResponse(BaseModel):
    """Caller's content carrying a tag, grouped by table."""

    projects: list[ProjectResponse] = Field(default_factory=list)
    scripts: list[ScriptResponse] = Field(default_factory=list)
    notes: list[NoteResponse] = Field(default_factory=list)
    inspirations: list[InspirationResponse] = Field(default_factory=list)
