"""Categories — HTTP adapter for the category use-case.

Invariants:
    - Bodies and query strings are validated by Pydantic before the use-case runs
    - Route handlers hold no business rules: they translate to/from CategoryUseCase
    - ResourceNotFoundError → 404, StoreFailureError → 400 via global handlers
    - POST answers 201; GET, PATCH, DELETE and list answer 200
    - An empty list is a 200 with data == []
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import CategoryId
from catalog.core.errors import InvalidRequestError
from catalog.infrastructure.category_repository import SQLAlchemyCategoryRepository
from catalog.infrastructure.database import get_db
from catalog.schemas.category import (
    CategoryCreate,
    CategoryCreatedResponse,
    CategoryDetailResponse,
    CategoryListQuery,
    CategoryListResponse,
    CategoryMutationResponse,
    CategoryResponse,
    CategoryUpdate,
    PagingResponse,
)
from catalog.services.category_usecase import CategoryUseCase

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


def get_category_usecase(db: AsyncSession = Depends(get_db)) -> CategoryUseCase:
    """Build the use-case over a repository bound to this request's session."""
    return CategoryUseCase(SQLAlchemyCategoryRepository(db))


def _require_id(category_id: str) -> CategoryId:
    category_id = category_id.strip()
    if not category_id:
        raise InvalidRequestError("ID is required", "id")
    return CategoryId(category_id)


@router.post(
    "", response_model=CategoryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    usecase: CategoryUseCase = Depends(get_category_usecase),
):
    """Create a category; the id is generated server-side."""
    category_id = await usecase.create(body)
    return CategoryCreatedResponse(
        message="Category created successfully", data=category_id,
    )


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    query: Annotated[CategoryListQuery, Query()],
    usecase: CategoryUseCase = Depends(get_category_usecase),
):
    """List non-deleted categories, newest first."""
    filters = query.filters()
    paging = query.paging()
    categories = await usecase.list(filters, paging)
    return CategoryListResponse(
        message="Category list successfully",
        data=[CategoryResponse.model_validate(c) for c in categories],
        paging=PagingResponse.model_validate(paging),
        filter=query.model_dump(
            mode="json", exclude={"page", "limit"}, exclude_none=True,
        ),
    )


@router.get("/{category_id}", response_model=CategoryDetailResponse)
async def get_category(
    category_id: str,
    usecase: CategoryUseCase = Depends(get_category_usecase),
):
    """Get category details."""
    category = await usecase.get_detail(_require_id(category_id))
    return CategoryDetailResponse(
        message="Category found successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.patch("/{category_id}", response_model=CategoryMutationResponse)
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    usecase: CategoryUseCase = Depends(get_category_usecase),
):
    """Apply a partial update."""
    updated = await usecase.update(_require_id(category_id), body)
    return CategoryMutationResponse(
        message="Category updated successfully", data=updated,
    )


@router.delete("/{category_id}", response_model=CategoryMutationResponse)
async def delete_category(
    category_id: str,
    hard: bool = Query(False),
    usecase: CategoryUseCase = Depends(get_category_usecase),
):
    """Soft-delete a category, or remove the row when hard=true."""
    deleted = await usecase.delete(_require_id(category_id), hard=hard)
    return CategoryMutationResponse(
        message="Category deleted successfully", data=deleted,
    )
