"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - database_url always names an async driver

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SQLite by default: the service ships as a single process with an embedded store
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


def to_async_driver_url(url: str) -> str:
    """Plain postgresql:// and sqlite:// URLs get their async drivers."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./password_manager.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_to_async_driver(cls, v: str) -> str:
        return to_async_driver_url(v) if isinstance(v, str) else v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    create_tables_on_startup: bool = True

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: str = "password_manager.log"


@lru_cache
def get_settings() -> Settings:
    return Settings()
