"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from modules.backend.models.note import Note
from modules.backend.repositories.base import ProjectScopedRepository


class NoteRepository(ProjectScopedRepository[Note]):
    """
    Repository for Note model.

    Inherits ownership-scoped CRUD and project/inbox queries.
    """

    model = Note
