"""
Inspiration Service.

Business logic for saved links, images and files.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.inspiration import Inspiration
from modules.backend.repositories.inspiration import InspirationRepository
from modules.backend.schemas.inspiration import InspirationCreate
from modules.backend.services.content import ContentService
from modules.backend.services.link_metadata import resolve_link_metadata


class InspirationService(ContentService[Inspiration]):
    """Service for inspiration business logic."""

    nullable_fields = frozenset({"project_id"})

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = InspirationRepository(session)

    async def create(self, user_id: str, data: InspirationCreate) -> Inspiration:
        """
        Create an inspiration owned by the caller.

        Links get metadata resolved from their URL at creation time.
        """
        metadata = {}
        if data.type == "link" and data.url:
            metadata = resolve_link_metadata(data.url)
            self._log_debug("Link metadata resolved", domain=metadata["domain"])

        return await self._create(
            user_id,
            project_id=data.project_id,
            type=data.type,
            title=data.title,
            url=data.url,
            metadata_=metadata,
            tags=list(data.tags),
        )

    async def list_all(self, user_id: str, project_id: str | None = None) -> list[Inspiration]:
        """Caller's inspirations, optionally limited to one project, newest first."""
        if project_id:
            return await self.repo.list_by_project(project_id, user_id)
        return await self.repo.list_for_user(user_id)

    async def list_by_project(self, user_id: str, project_id: str) -> list[Inspiration]:
        """Caller's inspirations filed under ``project_id``."""
        return await self.repo.list_by_project(project_id, user_id)
