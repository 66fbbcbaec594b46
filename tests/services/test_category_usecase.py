"""Category Use-Case — business policy against a mocked repository.

Invariants:
    - create() stamps id, status=active, created_at == updated_at, then inserts
    - absent and soft-deleted ids are both ResourceNotFoundError for get/update/delete
    - falsy repository results become StoreFailureError
    - list() passes filter and paging straight through
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from catalog.core.domain_types import CategoryId, CategoryStatus, Paging
from catalog.core.entities import Category
from catalog.core.errors import ResourceNotFoundError, StoreFailureError
from catalog.schemas.category import CategoryCreate, CategoryUpdate
from catalog.services.category_usecase import CategoryUseCase

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
FIXED_ID = CategoryId("01900000-0000-7000-8000-000000000001")


@pytest.fixture
def repository():
    repo = AsyncMock()
    repo.insert.return_value = True
    repo.update.return_value = True
    repo.delete.return_value = True
    repo.list.return_value = []
    return repo


@pytest.fixture
def usecase(repository):
    return CategoryUseCase(
        repository, clock=lambda: FIXED_NOW, id_factory=lambda: FIXED_ID,
    )


def _stored(status: CategoryStatus = CategoryStatus.ACTIVE) -> Category:
    return Category(
        id=FIXED_ID, name="Electronics", status=status,
        created_at=FIXED_NOW, updated_at=FIXED_NOW,
    )


# ─── create ─────────────────────────────────────────────────────

async def test_create_returns_generated_id(usecase, repository):
    result = await usecase.create(CategoryCreate(name="Electronics"))
    assert result == FIXED_ID
    repository.insert.assert_awaited_once()


async def test_create_builds_full_entity(usecase, repository):
    dto = CategoryCreate(
        name="Electronics",
        description="Electronic devices",
        position=1,
        image="https://example.com/image.jpg",
        parent_id="123e4567-e89b-12d3-a456-426614174001",
    )
    await usecase.create(dto)

    inserted: Category = repository.insert.await_args.args[0]
    assert inserted.id == FIXED_ID
    assert inserted.name == "Electronics"
    assert inserted.description == "Electronic devices"
    assert inserted.position == 1
    assert inserted.image == "https://example.com/image.jpg"
    assert inserted.parent_id == "123e4567-e89b-12d3-a456-426614174001"
    assert inserted.created_at == inserted.updated_at == FIXED_NOW


async def test_create_forces_active_status(usecase, repository):
    await usecase.create(CategoryCreate(name="Electronics", status="deleted"))
    inserted: Category = repository.insert.await_args.args[0]
    assert inserted.status == CategoryStatus.ACTIVE


async def test_create_default_id_factory_yields_fresh_ids(repository):
    usecase = CategoryUseCase(repository)
    first = await usecase.create(CategoryCreate(name="A"))
    second = await usecase.create(CategoryCreate(name="B"))
    assert first != second


async def test_create_raises_when_insert_reports_failure(usecase, repository):
    repository.insert.return_value = False
    with pytest.raises(StoreFailureError) as exc_info:
        await usecase.create(CategoryCreate(name="Electronics"))
    assert exc_info.value.message == "Category creation failed"


async def test_create_propagates_store_exceptions(usecase, repository):
    repository.insert.side_effect = RuntimeError("connection lost")
    with pytest.raises(RuntimeError):
        await usecase.create(CategoryCreate(name="Electronics"))


# ─── get_detail ─────────────────────────────────────────────────

async def test_get_detail_returns_active_category(usecase, repository):
    repository.get.return_value = _stored()
    category = await usecase.get_detail(FIXED_ID)
    assert category.name == "Electronics"
    repository.get.assert_awaited_once_with(FIXED_ID)


async def test_get_detail_returns_inactive_category(usecase, repository):
    repository.get.return_value = _stored(CategoryStatus.INACTIVE)
    category = await usecase.get_detail(FIXED_ID)
    assert category.status == CategoryStatus.INACTIVE


@pytest.mark.parametrize("stored", [None, _stored(CategoryStatus.DELETED)])
async def test_get_detail_hides_absent_and_deleted(usecase, repository, stored):
    repository.get.return_value = stored
    with pytest.raises(ResourceNotFoundError):
        await usecase.get_detail(FIXED_ID)


# ─── update ─────────────────────────────────────────────────────

async def test_update_passes_changes_and_stamps_updated_at(usecase, repository):
    repository.get.return_value = _stored()
    assert await usecase.update(FIXED_ID, CategoryUpdate(name="Gadgets")) is True
    repository.update.assert_awaited_once_with(
        FIXED_ID, {"name": "Gadgets", "updated_at": FIXED_NOW},
    )


@pytest.mark.parametrize("stored", [None, _stored(CategoryStatus.DELETED)])
async def test_update_hides_absent_and_deleted(usecase, repository, stored):
    repository.get.return_value = stored
    with pytest.raises(ResourceNotFoundError):
        await usecase.update(FIXED_ID, CategoryUpdate(name="Gadgets"))
    repository.update.assert_not_awaited()


async def test_update_raises_when_store_reports_failure(usecase, repository):
    repository.get.return_value = _stored()
    repository.update.return_value = False
    with pytest.raises(StoreFailureError):
        await usecase.update(FIXED_ID, CategoryUpdate(name="Gadgets"))


# ─── delete ─────────────────────────────────────────────────────

async def test_soft_delete_is_default(usecase, repository):
    repository.get.return_value = _stored()
    assert await usecase.delete(FIXED_ID) is True
    repository.delete.assert_awaited_once_with(FIXED_ID, False)


async def test_hard_delete_is_forwarded(usecase, repository):
    repository.get.return_value = _stored()
    await usecase.delete(FIXED_ID, hard=True)
    repository.delete.assert_awaited_once_with(FIXED_ID, True)


@pytest.mark.parametrize("hard", [False, True])
async def test_delete_of_deleted_category_is_not_found(usecase, repository, hard):
    repository.get.return_value = _stored(CategoryStatus.DELETED)
    with pytest.raises(ResourceNotFoundError):
        await usecase.delete(FIXED_ID, hard=hard)
    repository.delete.assert_not_awaited()


async def test_delete_raises_when_store_reports_failure(usecase, repository):
    repository.get.return_value = _stored()
    repository.delete.return_value = False
    with pytest.raises(StoreFailureError):
        await usecase.delete(FIXED_ID)


# ─── list ───────────────────────────────────────────────────────

async def test_list_passes_through(usecase, repository):
    paging = Paging(page=2, limit=5)
    repository.list.return_value = [_stored()]
    result = await usecase.list({"status": CategoryStatus.ACTIVE}, paging)
    assert len(result) == 1
    repository.list.assert_awaited_once_with({"status": CategoryStatus.ACTIVE}, paging)
