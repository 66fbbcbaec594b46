"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("DATABASE_VERIFY_ON_STARTUP", "false")
