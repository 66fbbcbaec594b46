"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Repository owns no business rules: it never checks status on get/update/delete
    - list() excludes soft-deleted rows and writes the matching total into paging

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQLAlchemy implementation and
      test doubles need no shared base class
"""

from typing import Any, Protocol

from catalog.core.domain_types import CategoryId, Paging
from catalog.core.entities import Category


class CategoryRepository(Protocol):
    """Contract for category persistence — implemented by shell."""
    async def get(self, category_id: CategoryId) -> Category | None: ...
    async def list(
        self, filters: dict[str, Any], paging: Paging,
    ) -> list[Category]: ...
    async def insert(self, category: Category) -> bool: ...
    async def update(
        self, category_id: CategoryId, changes: dict[str, Any],
    ) -> bool: ...
    async def delete(self, category_id: CategoryId, hard: bool = False) -> bool: ...
