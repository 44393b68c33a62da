"""
Note Model.

Database model for notes. Same shape as a script, with a wider set
of block types (code and quote).
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Note(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """Note database model."""

    __tablename__ = "notes"

    project_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    content: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
