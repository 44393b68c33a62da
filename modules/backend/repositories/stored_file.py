"""
Stored File Repository.
"""

from modules.backend.models.stored_file import StoredFile
from modules.backend.repositories.base import OwnedRepository


class StoredFileRepository(OwnedRepository[StoredFile]):
    """Repository for StoredFile model."""

    model = StoredFile
