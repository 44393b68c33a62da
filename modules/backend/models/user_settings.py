"""
User Settings Model.

One preferences row per user, created on first save.
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, TimestampMixin, UUIDMixin


class UserSettings(UUIDMixin, TimestampMixin, Base):
    """User preferences database model."""

    __tablename__ = "user_settings"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    preferences: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)

    def __repr__(self) -> str:
        return f"<UserSettings(user_id={self.user_id!r})>"
