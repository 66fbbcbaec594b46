"""Category Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CategoryCreate.name: 1-50 chars; description <= 50 chars; image absolute URL <= 100 chars
    - position is a JSON integer only (strict: no "3" or 3.0 coercion), 32-bit signed range
    - parent_id is RFC 4122 UUID text, normalized to canonical lowercase form
    - CategoryUpdate: every field optional; explicit nulls are dropped by to_changes()
    - CategoryListQuery: 1 <= page <= MAX_PAGE (offset fits 64 bits), 1 <= limit <= 100

Design Decisions:
    - AfterValidator over custom types: stored values stay plain str
    - status accepted on create but ignored (the use-case forces active)
"""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import (
    AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError,
)

from catalog.core.domain_types import CategoryStatus, Paging

_URL_ADAPTER = TypeAdapter(AnyUrl)

# position is an INTEGER column; row offsets are bound as signed 64-bit.
POSITION_MIN, POSITION_MAX = -(2**31), 2**31 - 1
MAX_PAGE_LIMIT = 100
MAX_PAGE = (2**63 - 1) // MAX_PAGE_LIMIT


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ValueError("Invalid URL format") from exc
    return value


def _canonical_uuid(value: str) -> str:
    try:
        return str(UUID(value))
    except ValueError as exc:
        raise ValueError("Invalid parent_id format") from exc


ImageUrl = Annotated[str, Field(max_length=100), AfterValidator(_check_url)]
CategoryReference = Annotated[str, AfterValidator(_canonical_uuid)]


class CategoryCreate(BaseModel):
    """Category creation payload."""
    name: str = Field(min_length=1, max_length=50)
    image: ImageUrl | None = None
    position: int | None = Field(
        None, strict=True, ge=POSITION_MIN, le=POSITION_MAX,
    )
    description: str | None = Field(None, max_length=50)
    parent_id: CategoryReference | None = None
    status: CategoryStatus | None = None


class CategoryUpdate(BaseModel):
    """Partial update payload — only provided fields change."""
    name: str | None = Field(None, min_length=1, max_length=50)
    image: ImageUrl | None = None
    position: int | None = Field(
        None, strict=True, ge=POSITION_MIN, le=POSITION_MAX,
    )
    description: str | None = Field(None, max_length=50)
    parent_id: CategoryReference | None = None
    status: CategoryStatus | None = None

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class CategoryListQuery(BaseModel):
    """Query string for GET /categories: equality filter plus pagination."""
    page: int = Field(1, ge=1, le=MAX_PAGE)
    limit: int = Field(10, ge=1, le=MAX_PAGE_LIMIT)
    name: str | None = Field(None, max_length=50)
    status: CategoryStatus | None = None
    parent_id: CategoryReference | None = None
    position: int | None = Field(None, ge=POSITION_MIN, le=POSITION_MAX)

    def filters(self) -> dict[str, Any]:
        return self.model_dump(
            exclude={"page", "limit"}, exclude_none=True,
        )

    def paging(self) -> Paging:
        return Paging(page=self.page, limit=self.limit)


# --- Responses ----------------------------------------------------------------

class CategoryResponse(BaseModel):
    """Public-facing category record."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    image: str | None = None
    position: int | None = None
    description: str | None = None
    parent_id: str | None = None
    status: CategoryStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PagingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    page: int
    limit: int
    total: int


class CategoryCreatedResponse(BaseModel):
    message: str
    data: str


class CategoryDetailResponse(BaseModel):
    message: str
    data: CategoryResponse


class CategoryMutationResponse(BaseModel):
    message: str
    data: bool


class CategoryListResponse(BaseModel):
    message: str
    data: list[CategoryResponse]
    paging: PagingResponse
    filter: dict[str, Any]
