"""
Inspiration Model.

Saved links, uploaded images and files.
"""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Inspiration(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Inspiration database model.

    ``type`` is one of link, image or file. ``file_id`` references a blob
    in the file store and is only set for uploads.
    """

    __tablename__ = "inspirations"

    project_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, default=dict, nullable=False
    )
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Inspiration(id={self.id}, type={self.type!r}, title={self.title!r})>"
