"""Category Entity — plain data record, independent of the mapper.

Invariants:
    - id is assigned once by the use-case, never by the caller or the store
    - created_at == updated_at at the instant of creation
    - parent_id is not checked against existing categories
"""

from dataclasses import dataclass, field
from datetime import datetime

from catalog.core.domain_types import CategoryId, CategoryStatus


@dataclass
class Category:
    """A category record as seen by the use-case layer."""
    id: CategoryId
    name: str
    image: str | None = None
    position: int | None = None
    description: str | None = None
    parent_id: str | None = None
    status: CategoryStatus = CategoryStatus.ACTIVE
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)

    @property
    def is_deleted(self) -> bool:
        return self.status == CategoryStatus.DELETED
