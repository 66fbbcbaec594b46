"""ORM Models — SQLAlchemy declarative rows for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rows are a persistence detail; the use-case layer sees core.entities only
"""

from catalog.models.category import CategoryRecord  # noqa: F401
