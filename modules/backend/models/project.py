"""
Project Model.

Top-level container for a creator's scripts, notes and inspirations.
"""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Project(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Project database model.

    Children reference a project by its id string only; deleting a
    project leaves their project_id pointing at nothing.
    """

    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, title={self.title!r})>"
