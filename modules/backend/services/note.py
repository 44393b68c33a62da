"""
Note Service.

Business logic for notes, including the project and inbox views.
"""

from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.note import Note
from modules.backend.repositories.note import NoteRepository
from modules.backend.schemas.block import default_content, dump_blocks
from modules.backend.schemas.note import NoteCreate
from modules.backend.services.content import ContentService


class NoteService(ContentService[Note]):
    """Service for note business logic."""

    nullable_fields = frozenset({"project_id"})

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create(self, user_id: str, data: NoteCreate) -> Note:
        """
        Create a note owned by the caller.

        Without supplied content the note starts with one empty text block.
        """
        content = dump_blocks(data.content) if data.content is not None else default_content()
        return await self._create(
            user_id,
            project_id=data.project_id,
            title=data.title,
            content=content,
            tags=list(data.tags),
        )

    def _update_values(self, data: BaseModel) -> dict[str, Any]:
        values = super()._update_values(data)
        if "content" in values:
            values["content"] = dump_blocks(data.content)
        return values

    async def list_all(self, user_id: str, project_id: str | None = None) -> list[Note]:
        """Caller's notes, optionally limited to one project, newest first."""
        if project_id:
            return await self.repo.list_by_project(project_id, user_id)
        return await self.repo.list_for_user(user_id)

    async def list_by_project(self, user_id: str, project_id: str) -> list[Note]:
        """Caller's notes filed under ``project_id``."""
        return await self.repo.list_by_project(project_id, user_id)

    async def list_uncategorized(self, user_id: str) -> list[Note]:
        """Caller's inbox: notes with no project."""
        return await self.repo.list_uncategorized(user_id)
