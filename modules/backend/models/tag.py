"""
Tag Model.

Per-user tag registry. Content records reference tags by name.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, CreatedAtMixin, OwnedMixin, UUIDMixin


class Tag(UUIDMixin, OwnedMixin, CreatedAtMixin, Base):
    """
    Tag database model.

    ``name`` is always stored lower-cased. ``usage_count`` is an advisory
    counter maintained by item tag edits; the authoritative count is
    computed by scanning content.
    """

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_tags_user_name"),)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    usage_count: Mapped[int] = mapped_column(default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name!r}, usage_count={self.usage_count})>"
