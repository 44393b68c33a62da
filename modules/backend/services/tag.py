"""
Tag Service.

Business logic for the tag registry and for tagging content items.

Content records reference tags by lower-cased name. The registry row's
``usage_count`` is an advisory counter kept up by add/remove on items;
``actual_usage_count`` is always recomputed by scanning the caller's
content. ``reconcile_usage_counts`` writes the scanned value back and is
safe to run any number of times.

All writes of one call share the request session, so a tag delete
sweep and the registry delete commit or roll back together.
"""

from collections import Counter
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.utils import normalize_tag_name, utc_now
from modules.backend.models.tag import Tag
from modules.backend.repositories.base import ContentRepository
from modules.backend.repositories.inspiration import InspirationRepository
from modules.backend.repositories.note import NoteRepository
from modules.backend.repositories.project import ProjectRepository
from modules.backend.repositories.script import ScriptRepository
from modules.backend.repositories.tag import TagRepository
from modules.backend.schemas.tag import ItemType, TagCreate, TagUsageResponse
from modules.backend.services.base import BaseService


class TagService(BaseService):
    """Service for tag business logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = TagRepository(session)
        self.item_repos: dict[ItemType, ContentRepository[Any]] = {
            ItemType.PROJECTS: ProjectRepository(session),
            ItemType.SCRIPTS: ScriptRepository(session),
            ItemType.NOTES: NoteRepository(session),
            ItemType.INSPIRATIONS: InspirationRepository(session),
        }

    async def list_tags(self, user_id: str) -> list[Tag]:
        """All of the caller's tags, newest first."""
        return await self.repo.list_for_user(user_id)

    async def _scan_usage(self, user_id: str) -> Counter[str]:
        """Count, per tag name, the caller's content records carrying it."""
        usage: Counter[str] = Counter()
        for repo in self.item_repos.values():
            for item in await repo.list_for_user(user_id):
                usage.update(set(item.tags))
        return usage

    @staticmethod
    def _with_usage(tag: Tag, actual: int) -> TagUsageResponse:
        return TagUsageResponse(
            id=tag.id,
            user_id=tag.user_id,
            name=tag.name,
            color=tag.color,
            usage_count=tag.usage_count,
            created_at=tag.created_at,
            actual_usage_count=actual,
        )

    async def list_tags_with_usage(self, user_id: str) -> list[TagUsageResponse]:
        """
        Caller's tags with scan-based usage counts.

        The stored ``usage_count`` is returned unchanged next to
        ``actual_usage_count``; the two may disagree.
        """
        tags = await self.repo.list_for_user(user_id)
        usage = await self._scan_usage(user_id)
        return [self._with_usage(tag, usage.get(tag.name, 0)) for tag in tags]

    async def create_or_update_tag(self, user_id: str, data: TagCreate) -> Tag:
        """
        Create a tag, or set the color of an existing one.

        Names are compared lower-cased. An existing tag keeps its
        usage_count; only its color changes.
        """
        name = normalize_tag_name(data.name)
        existing = await self.repo.get_by_name(user_id, name)

        if existing is not None:
            self._log_operation("Updating tag color", user_id=user_id, tag=name)
            return await self._execute_db_operation(
                "update_tag",
                self.repo.update(existing, color=data.color),
            )

        self._log_operation("Creating tag", user_id=user_id, tag=name)
        return await self._execute_db_operation(
            "create_tag",
            self.repo.create(
                user_id=user_id,
                name=name,
                color=data.color,
                usage_count=0,
                created_at=utc_now(),
            ),
        )

    async def delete_tag(self, user_id: str, tag_id: str) -> int:
        """
        Delete a tag and strip its name from all of the caller's content.

        Returns:
            Number of content records that were edited

        Raises:
            NotFoundError: If the tag is missing or owned by someone else
        """
        tag = await self.repo.get_owned(tag_id, user_id)
        self._log_operation("Deleting tag", user_id=user_id, tag=tag.name)

        edited = 0
        for item_type, repo in self.item_repos.items():
            for item in await repo.list_tagged(user_id, tag.name):
                await self._execute_db_operation(
                    f"untag_{item_type.value}",
                    repo.update(
                        item,
                        tags=[name for name in item.tags if name != tag.name],
                        updated_at=utc_now(),
                    ),
                )
                edited += 1

        await self._execute_db_operation("delete_tag", self.repo.delete(tag))
        self._log_debug("Tag deleted", tag=tag.name, items_edited=edited)
        return edited

    async def add_tag_to_item(
        self,
        user_id: str,
        item_type: ItemType,
        item_id: str,
        tag_name: str,
    ) -> Any:
        """
        Attach a tag to a content item and count the use.

        Does nothing if the item already carries the tag. Otherwise the
        name is appended, and the registry tag is created with
        usage_count 1 or has its usage_count incremented.

        Returns:
            The (possibly unchanged) item

        Raises:
            NotFoundError: If the item is missing or owned by someone else
        """
        repo = self.item_repos[item_type]
        item = await repo.get_owned(item_id, user_id)
        name = normalize_tag_name(tag_name)

        if name in item.tags:
            return item

        self._log_operation(
            "Tagging item",
            user_id=user_id,
            item_type=item_type.value,
            item_id=item_id,
            tag=name,
        )
        item = await self._execute_db_operation(
            f"tag_{item_type.value}",
            repo.update(item, tags=[*item.tags, name], updated_at=utc_now()),
        )

        tag = await self.repo.get_by_name(user_id, name)
        if tag is None:
            await self._execute_db_operation(
                "create_tag",
                self.repo.create(
                    user_id=user_id,
                    name=name,
                    usage_count=1,
                    created_at=utc_now(),
                ),
            )
        else:
            await self._execute_db_operation(
                "increment_tag",
                self.repo.update(tag, usage_count=tag.usage_count + 1),
            )
        return item

    async def remove_tag_from_item(
        self,
        user_id: str,
        item_type: ItemType,
        item_id: str,
        tag_name: str,
    ) -> Any:
        """
        Detach a tag from a content item and uncount the use.

        The registry tag's usage_count is decremented, never below zero,
        and the tag is kept even at zero. Removing a tag the item does
        not carry changes nothing.

        Raises:
            NotFoundError: If the item is missing or owned by someone else
        """
        repo = self.item_repos[item_type]
        item = await repo.get_owned(item_id, user_id)
        name = normalize_tag_name(tag_name)

        if name not in item.tags:
            return item

        self._log_operation(
            "Untagging item",
            user_id=user_id,
            item_type=item_type.value,
            item_id=item_id,
            tag=name,
        )
        item = await self._execute_db_operation(
            f"untag_{item_type.value}",
            repo.update(
                item,
                tags=[existing for existing in item.tags if existing != name],
                updated_at=utc_now(),
            ),
        )

        tag = await self.repo.get_by_name(user_id, name)
        if tag is not None:
            await self._execute_db_operation(
                "decrement_tag",
                self.repo.update(tag, usage_count=max(0, tag.usage_count - 1)),
            )
        return item

    async def get_content_by_tag(self, user_id: str, tag_name: str) -> dict[ItemType, list[Any]]:
        """Caller's content carrying ``tag_name``, grouped by table."""
        name = normalize_tag_name(tag_name)
        return {
            item_type: await repo.list_tagged(user_id, name)
            for item_type, repo in self.item_repos.items()
        }

    async def reconcile_usage_counts(self, user_id: str) -> list[TagUsageResponse]:
        """
        Overwrite every stored usage_count with the scanned count.

        Returns:
            The caller's tags after reconciliation
        """
        tags = await self.repo.list_for_user(user_id)
        usage = await self._scan_usage(user_id)

        corrected = 0
        for tag in tags:
            actual = usage.get(tag.name, 0)
            if tag.usage_count != actual:
                await self._execute_db_operation(
                    "reconcile_tag",
                    self.repo.update(tag, usage_count=actual),
                )
                corrected += 1

        self._log_operation("Tag usage reconciled", user_id=user_id, corrected=corrected)
        return [self._with_usage(tag, usage.get(tag.name, 0)) for tag in tags]
