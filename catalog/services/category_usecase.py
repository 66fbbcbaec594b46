"""Category Use-Case — the only business policy layer for categories.

Invariants:
    - create() generates the id and stamps status=active, created_at == updated_at
    - get_detail/update/delete treat absent and soft-deleted ids the same: ResourceNotFoundError
    - update() stamps updated_at on every call; other fields change only as provided
    - list() has no guard; the repository already excludes soft-deleted rows
    - A repository call that reports no effect becomes StoreFailureError

Design Decisions:
    - Repository, clock and id factory injected: no process-wide store handle
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from catalog.core.domain_types import CategoryId, CategoryStatus, Paging
from catalog.core.entities import Category
from catalog.core.errors import ResourceNotFoundError, StoreFailureError
from catalog.core.identifiers import new_category_id
from catalog.core.repository_protocols import CategoryRepository
from catalog.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CategoryUseCase:
    """Create, read, update, delete and list categories."""

    def __init__(
        self,
        repository: CategoryRepository,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], CategoryId] = new_category_id,
    ):
        self.repository = repository
        self._clock = clock
        self._id_factory = id_factory

    async def create(self, data: CategoryCreate) -> CategoryId:
        now = self._clock()
        category = Category(
            id=self._id_factory(),
            name=data.name,
            image=data.image,
            position=data.position,
            description=data.description,
            parent_id=data.parent_id,
            status=CategoryStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        if not await self.repository.insert(category):
            logger.error(
                "Category insert reported no effect",
                extra={"category_id": category.id, "operation": "insert"},
            )
            raise StoreFailureError("Category creation failed", "insert")
        logger.info("Category created", extra={"category_id": category.id})
        return category.id

    async def get_detail(self, category_id: CategoryId) -> Category:
        return await self._get_visible(category_id)

    async def update(self, category_id: CategoryId, data: CategoryUpdate) -> bool:
        await self._get_visible(category_id)
        changes: dict[str, Any] = data.to_changes()
        changes["updated_at"] = self._clock()
        if not await self.repository.update(category_id, changes):
            logger.error(
                "Category update reported no effect",
                extra={"category_id": category_id, "operation": "update"},
            )
            raise StoreFailureError("Category update failed", "update")
        logger.info(
            f"Category updated ({', '.join(sorted(changes))})",
            extra={"category_id": category_id},
        )
        return True

    async def delete(self, category_id: CategoryId, hard: bool = False) -> bool:
        await self._get_visible(category_id)
        if not await self.repository.delete(category_id, hard):
            logger.error(
                "Category delete reported no effect",
                extra={"category_id": category_id, "operation": "delete"},
            )
            raise StoreFailureError("Category delete failed", "delete")
        logger.info(
            f"Category {'hard' if hard else 'soft'}-deleted",
            extra={"category_id": category_id},
        )
        return True

    async def list(self, filters: dict[str, Any], paging: Paging) -> list[Category]:
        return await self.repository.list(filters, paging)

    async def _get_visible(self, category_id: CategoryId) -> Category:
        """Fetch a category or raise 404 when absent or soft-deleted."""
        category = await self.repository.get(category_id)
        if category is None or category.is_deleted:
            logger.info(
                "Category not found", extra={"category_id": category_id},
            )
            raise ResourceNotFoundError("Category", category_id)
        return category
