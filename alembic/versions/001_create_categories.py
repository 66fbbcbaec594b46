"""Create categories table with status enum.

Revision ID: 001_create_categories
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_categories"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

category_status = sa.Enum("active", "inactive", "deleted", name="category_status")


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("image", sa.String(100), nullable=True),
        sa.Column("position", sa.Integer, nullable=True),
        sa.Column("description", sa.String(50), nullable=True),
        sa.Column("parent_id", sa.String(36), nullable=True),
        sa.Column("status", category_status, nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_categories_status", "categories", ["status"])


def downgrade() -> None:
    op.drop_index("ix_categories_status", table_name="categories")
    op.drop_table("categories")
    category_status.drop(op.get_bind(), checkfirst=True)
