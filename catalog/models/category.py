"""Category ORM — one row per category in the `categories` table.

Invariants:
    - id is a caller-supplied string primary key (generated by the use-case)
    - status is a constrained enumeration column storing the enum values
    - updated_at refreshes on every UPDATE that does not set it explicitly
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.core.domain_types import CategoryStatus
from catalog.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CategoryRecord(Base):
    """Persisted category row."""
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    image: Mapped[str | None] = mapped_column(String(100), nullable=True)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(String(50), nullable=True)
    parent_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    status: Mapped[CategoryStatus] = mapped_column(
        Enum(
            CategoryStatus,
            name="category_status",
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=CategoryStatus.ACTIVE,
        server_default=CategoryStatus.ACTIVE.value,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<CategoryRecord {self.id} {self.status.value}>"
