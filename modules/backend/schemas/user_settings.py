"""
User Settings Schemas.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class UserPreferences(BaseModel):
    """Display preferences. Defaults apply until the user saves settings."""

    theme: Literal["light", "dark", "system"] = "system"
    default_view: Literal["projects", "inbox", "recent"] = "projects"
    compact_mode: bool = False
    show_preview_cards: bool = True


class UserPreferencesUpdate(BaseModel):
    """Partial preferences update. Unset fields are left alone."""

    theme: Literal["light", "dark", "system"] | None = None
    default_view: Literal["projects", "inbox", "recent"] | None = None
    compact_mode: bool | None = None
    show_preview_cards: bool | None = None


class UserSettingsResponse(BaseModel):
    """Schema for user settings in API responses."""

    user_id: str
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    model_config = ConfigDict(from_attributes=True)
