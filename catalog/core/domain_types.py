"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CategoryId wraps the string form of a UUID; never a bare str in domain logic
    - CategoryStatus is the single status enumeration shared by model, schemas
      and repository
    - Paging.total is written back by the repository after a list query

Design Decisions:
    - str Enum: serializes to JSON without custom encoders
    - Paging is a mutable dataclass: the total count is a caller-visible result
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CategoryId = NewType("CategoryId", str)


# ─── Enums ───────────────────────────────────────────────────────

class CategoryStatus(str, Enum):
    """Category lifecycle states — maps to DB `status` column."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass
class Paging:
    """Windowed list query: 1-based page, page size, total matching rows."""
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
