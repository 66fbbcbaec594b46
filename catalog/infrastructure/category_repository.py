"""Category Repository — SQLAlchemy implementation of core.repository_protocols.CategoryRepository.

Invariants:
    - Holds one AsyncSession handed in by the caller; never opens its own
    - Translates CategoryRecord rows to core.entities.Category (rows never leak upward)
    - list() excludes status == deleted, orders by id DESC and writes paging.total
    - get/update/delete never look at status (policy lives in the use-case)
    - Each mutation commits on its own; store exceptions propagate unchanged

Design Decisions:
    - Composition over active-record: the row class knows nothing about queries
    - get() uses populate_existing so a bulk UPDATE in the same session is visible
"""

import logging
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import CategoryId, CategoryStatus, Paging
from catalog.core.entities import Category
from catalog.models.category import CategoryRecord

logger = logging.getLogger(__name__)

FILTERABLE_FIELDS = frozenset(
    {"name", "image", "position", "description", "parent_id", "status"},
)
UPDATABLE_FIELDS = FILTERABLE_FIELDS | {"updated_at"}


def to_entity(row: CategoryRecord) -> Category:
    return Category(
        id=CategoryId(row.id),
        name=row.name,
        image=row.image,
        position=row.position,
        description=row.description,
        parent_id=row.parent_id,
        status=CategoryStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_record(category: Category) -> CategoryRecord:
    return CategoryRecord(
        id=category.id,
        name=category.name,
        image=category.image,
        position=category.position,
        description=category.description,
        parent_id=category.parent_id,
        status=category.status,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def _check_fields(fields: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Unsupported category fields: {', '.join(sorted(unknown))}")


class SQLAlchemyCategoryRepository:
    """Category persistence over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, category_id: CategoryId) -> Category | None:
        result = await self.db.execute(
            select(CategoryRecord)
            .where(CategoryRecord.id == category_id)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return to_entity(row) if row else None

    async def list(
        self, filters: dict[str, Any], paging: Paging,
    ) -> list[Category]:
        _check_fields(filters, FILTERABLE_FIELDS)
        conditions = [
            getattr(CategoryRecord, name) == value
            for name, value in filters.items()
        ]
        conditions.append(CategoryRecord.status != CategoryStatus.DELETED)

        total = await self.db.scalar(
            select(func.count()).select_from(CategoryRecord).where(*conditions),
        )
        paging.total = total or 0

        result = await self.db.execute(
            select(CategoryRecord)
            .where(*conditions)
            .order_by(CategoryRecord.id.desc())
            .offset(paging.offset)
            .limit(paging.limit),
        )
        return [to_entity(row) for row in result.scalars().all()]

    async def insert(self, category: Category) -> bool:
        self.db.add(to_record(category))
        await self.db.commit()
        return True

    async def update(
        self, category_id: CategoryId, changes: dict[str, Any],
    ) -> bool:
        _check_fields(changes, UPDATABLE_FIELDS)
        if not changes:
            return True
        result = await self.db.execute(
            update(CategoryRecord)
            .where(CategoryRecord.id == category_id)
            .values(**changes),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def delete(self, category_id: CategoryId, hard: bool = False) -> bool:
        if hard:
            stmt = delete(CategoryRecord).where(CategoryRecord.id == category_id)
        else:
            stmt = (
                update(CategoryRecord)
                .where(CategoryRecord.id == category_id)
                .values(status=CategoryStatus.DELETED)
            )
        result = await self.db.execute(stmt)
        await self.db.commit()
        logger.debug(
            f"{'Hard' if hard else 'Soft'} delete affected {result.rowcount} row(s)",
            extra={"category_id": category_id},
        )
        return result.rowcount > 0
