"""
Content Service.

Shared ownership-checked CRUD for the four content tables (projects,
scripts, notes, inspirations). Entity services subclass this and add
their own ``create`` plus any extra queries.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from modules.backend.core.utils import utc_now
from modules.backend.models.base import Base
from modules.backend.repositories.base import ContentRepository
from modules.backend.services.base import BaseService

ModelType = TypeVar("ModelType", bound=Base)


class ContentService(BaseService, Generic[ModelType]):
    """
    Base service for taggable, user-owned content.

    Subclasses set ``repo`` in ``__init__`` and list which update fields
    may be cleared by sending an explicit null in ``nullable_fields``.
    Every other field sent as null is ignored.
    """

    repo: ContentRepository[ModelType]
    nullable_fields: frozenset[str] = frozenset()

    @property
    def entity_name(self) -> str:
        return self.repo.model.__name__.lower()

    async def get(self, user_id: str, item_id: str) -> ModelType:
        """
        Get one of the caller's records.

        Raises:
            NotFoundError: If the record is missing or owned by someone else
        """
        return await self.repo.get_owned(item_id, user_id)

    async def list_all(self, user_id: str) -> list[ModelType]:
        """All of the caller's records, newest first."""
        return await self.repo.list_for_user(user_id)

    async def _create(self, user_id: str, **fields: Any) -> ModelType:
        """Insert a record owned by ``user_id`` with matching timestamps."""
        now = utc_now()
        self._log_operation(f"Creating {self.entity_name}", user_id=user_id)

        item = await self._execute_db_operation(
            f"create_{self.entity_name}",
            self.repo.create(user_id=user_id, created_at=now, updated_at=now, **fields),
        )

        self._log_debug(f"{self.entity_name.title()} created", item_id=item.id)
        return item

    def _update_values(self, data: BaseModel) -> dict[str, Any]:
        """Turn an update schema into column values, honoring nullability."""
        return {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in self.nullable_fields
        }

    async def update(self, user_id: str, item_id: str, data: BaseModel) -> ModelType:
        """
        Update one of the caller's records.

        Only fields present in ``data`` change; ``updated_at`` is always
        advanced, even for an empty update.

        Raises:
            NotFoundError: If the record is missing or owned by someone else
        """
        item = await self.repo.get_owned(item_id, user_id)
        changes = self._update_values(data)

        self._log_operation(
            f"Updating {self.entity_name}",
            user_id=user_id,
            item_id=item_id,
            fields=list(changes.keys()),
        )

        changes["updated_at"] = max(utc_now(), item.updated_at)
        return await self._execute_db_operation(
            f"update_{self.entity_name}",
            self.repo.update(item, **changes),
        )

    async def delete(self, user_id: str, item_id: str) -> None:
        """
        Delete one of the caller's records.

        Nothing referencing the record is touched.

        Raises:
            NotFoundError: If the record is missing or owned by someone else
        """
        item = await self.repo.get_owned(item_id, user_id)
        self._log_operation(f"Deleting {self.entity_name}", user_id=user_id, item_id=item_id)

        await self._execute_db_operation(
            f"delete_{self.entity_name}",
            self.repo.delete(item),
        )
