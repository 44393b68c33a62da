"""
Blob Store Interface.

The file gateway talks to object storage only through this interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class BlobInfo:
    """What the store knows about a stored object."""

    size: int
    content_type: str | None = None


class BlobStore(ABC):
    """
    Abstract object store keyed by storage id.

    Implementations own the bytes and the URL layout; ownership and
    bookkeeping live in the database, not here.
    """

    @abstractmethod
    async def save(self, storage_id: str, data: bytes, content_type: str | None = None) -> int:
        """Store bytes under ``storage_id``. Returns the stored size."""

    @abstractmethod
    async def read(self, storage_id: str) -> bytes:
        """
        Read the bytes stored under ``storage_id``.

        Raises:
            StorageError: If nothing is stored under the id
        """

    @abstractmethod
    async def stat(self, storage_id: str) -> BlobInfo | None:
        """Size and content type of a stored object, or None if absent."""

    @abstractmethod
    async def delete(self, storage_id: str) -> None:
        """Delete a blob. Deleting an absent blob is not an error."""

    @abstractmethod
    def get_url(self, storage_id: str) -> str:
        """Retrieval URL for a blob."""

    @abstractmethod
    def upload_url(self, user_id: str, storage_id: str) -> str:
        """URL that accepts a single upload of the blob ``storage_id``."""
