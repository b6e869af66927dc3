"""Lightweight configuration for the Dominion tick engine."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment or ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = Field(
        default="sqlite:///dominion.db", description="SQLAlchemy URL of the backing store"
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements to the log")
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    database_pool_recycle: int = Field(default=3600, description="Seconds before reconnecting")
    database_pool_timeout: int = Field(default=30, ge=1)

    ranking_chunk_size: int = Field(
        default=50,
        ge=1,
        description="Dominions loaded per batch while refreshing daily rankings",
    )
    tick_interval_seconds: float = Field(
        default=3600.0,
        description="Real-time seconds between hourly ticks when scheduling is enabled",
        gt=0.0,
    )
    daily_tick_hours: int = Field(
        default=24,
        ge=1,
        description="Number of hourly ticks between two daily ticks",
    )
    scheduler_enabled: bool = Field(
        default=False, description="Start the background tick scheduler with the API"
    )
    log_level: str = Field(default="INFO", description="Root log level for main.py")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
