"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Credentials come only from the environment or .env
    - get_settings() is cached: one Settings instance per process
    - Pool bounds and acquire timeout are fixed at process start

Design Decisions:
    - Every non-secret setting has a default matching docker-compose
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Service
    service_name: str = "catalog-api"
    service_version: str = "1.0.0"

    # Store
    database_url: str = "postgresql+asyncpg://catalog:catalog@db:5432/catalog"
    database_pool_size: int = Field(default=20, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    database_pool_timeout: int = Field(default=30, ge=1)
    database_pool_recycle: int = 3600
    database_echo: bool = False
    database_verify_on_startup: bool = True

    # HTTP
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """postgresql:// and postgres:// URLs are rewritten to the asyncpg dialect."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return "postgresql+asyncpg://" + v[len(prefix):]
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
