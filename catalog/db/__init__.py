"""Database Metadata — SQLAlchemy declarative Base shared by all ORM rows."""
