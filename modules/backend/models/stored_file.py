"""
Stored File Model.

Bookkeeping for blobs in the file store: who requested the upload
slot and whether bytes have arrived.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from modules.backend.models.base import Base, CreatedAtMixin, OwnedMixin, UUIDMixin


class StoredFile(UUIDMixin, OwnedMixin, CreatedAtMixin, Base):
    """Blob record. ``id`` doubles as the storage id."""

    __tablename__ = "stored_files"

    content_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[int | None] = mapped_column(nullable=True)
    uploaded: Mapped[bool] = mapped_column(default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<StoredFile(id={self.id}, uploaded={self.uploaded})>"
