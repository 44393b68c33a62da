"""
Script Model.

Block-structured script, filed under a project or left in the inbox.
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Script(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """Script database model. ``project_id`` is None for inbox scripts."""

    __tablename__ = "scripts"

    project_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Script(id={self.id}, title={self.title!r})>"
