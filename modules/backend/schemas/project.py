"""
Project Schemas.

Pydantic schemas for project API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.backend.core.utils import normalize_tags


class ProjectCreate(BaseModel):
    """Schema for creating a new project."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Project title",
        examples=["Spring video series"],
    )
    description: str | None = Field(
        default=None,
        max_length=10000,
        description="Project description",
    )
    tags: list[str] = Field(default_factory=list, description="Tag names")

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str]) -> list[str]:
        return normalize_tags(value)


class ProjectUpdate(BaseModel):
    """Schema for updating an existing project. Unset fields are left alone."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10000)
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tag_list(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else normalize_tags(value)


class ProjectResponse(BaseModel):
    """Schema for project in API responses."""

    id: str
    user_id: str
    title: str
    description: str | None
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
