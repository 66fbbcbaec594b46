"""Category Schemas — field-level validation at the API boundary.

Tests cover:
    - CategoryCreate accepts minimal and full payloads
    - Rejections: empty/long name, bad URL, long image, bad parent_id, non-integer position
    - All issues reported at once
    - CategoryUpdate partial semantics (unset and null fields dropped)
    - CategoryListQuery paging bounds and filter extraction
"""

import pytest
from pydantic import ValidationError

from catalog.core.domain_types import CategoryStatus
from catalog.schemas.category import (
    MAX_PAGE, CategoryCreate, CategoryListQuery, CategoryUpdate,
)

PARENT_ID = "123e4567-e89b-12d3-a456-426614174001"


def test_create_accepts_name_only():
    dto = CategoryCreate(name="Electronics")
    assert dto.name == "Electronics"
    assert dto.image is None
    assert dto.status is None


def test_create_accepts_all_fields():
    dto = CategoryCreate(
        name="Electronics",
        image="https://example.com/image.jpg",
        position=1,
        description="Electronic devices",
        parent_id=PARENT_ID,
        status="inactive",
    )
    assert dto.image == "https://example.com/image.jpg"
    assert dto.parent_id == PARENT_ID
    assert dto.status == CategoryStatus.INACTIVE


@pytest.mark.parametrize("payload", [
    {"name": ""},
    {"name": "x" * 51},
    {"name": "ok", "image": "not-a-url"},
    {"name": "ok", "image": "https://example.com/" + "a" * 90},
    {"name": "ok", "parent_id": "not-a-uuid"},
    {"name": "ok", "position": 1.5},
    {"name": "ok", "position": "3"},
    {"name": "ok", "position": 2**31},
    {"name": "ok", "position": -(2**31) - 1},
    {"name": "ok", "description": "d" * 51},
    {"name": "ok", "status": "archived"},
    {},
])
def test_create_rejects_malformed_payloads(payload):
    with pytest.raises(ValidationError):
        CategoryCreate(**payload)


def test_create_reports_every_issue():
    with pytest.raises(ValidationError) as exc_info:
        CategoryCreate(name="", image="nope", parent_id="bad")
    fields = {err["loc"][0] for err in exc_info.value.errors()}
    assert fields == {"name", "image", "parent_id"}


def test_parent_id_is_normalized():
    dto = CategoryCreate(name="ok", parent_id=PARENT_ID.upper())
    assert dto.parent_id == PARENT_ID


def test_unknown_fields_are_ignored():
    dto = CategoryCreate(name="ok", id="client-chosen", created_at="yesterday")
    assert not hasattr(dto, "id")


def test_update_allows_empty_payload():
    assert CategoryUpdate().to_changes() == {}


def test_update_keeps_only_provided_fields():
    dto = CategoryUpdate(name="Renamed", description=None)
    assert dto.to_changes() == {"name": "Renamed"}


def test_update_validates_like_create():
    with pytest.raises(ValidationError):
        CategoryUpdate(name="")
    with pytest.raises(ValidationError):
        CategoryUpdate(image="just some text")


def test_update_can_set_status():
    assert CategoryUpdate(status="inactive").to_changes() == {
        "status": CategoryStatus.INACTIVE,
    }


def test_list_query_defaults():
    query = CategoryListQuery()
    paging = query.paging()
    assert (paging.page, paging.limit, paging.total) == (1, 10, 0)
    assert query.filters() == {}


def test_list_query_extracts_filters():
    query = CategoryListQuery(page=2, limit=5, status="active", name="Books")
    assert query.filters() == {"status": CategoryStatus.ACTIVE, "name": "Books"}
    assert query.paging().offset == 5


@pytest.mark.parametrize("params", [
    {"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "abc"},
    {"page": MAX_PAGE + 1}, {"page": 10**20}, {"position": 2**40},
])
def test_list_query_rejects_bad_paging(params):
    with pytest.raises(ValidationError):
        CategoryListQuery(**params)


def test_list_query_largest_offset_fits_signed_64_bits():
    paging = CategoryListQuery(page=MAX_PAGE, limit=100).paging()
    assert paging.offset <= 2**63 - 1


def test_position_accepts_32_bit_extremes():
    assert CategoryCreate(name="ok", position=2**31 - 1).position == 2**31 - 1
    assert CategoryUpdate(position=-(2**31)).to_changes() == {"position": -(2**31)}
