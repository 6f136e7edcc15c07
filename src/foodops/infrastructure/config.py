"""Runtime settings, read from ``FOODOPS_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from foodops.infrastructure.persistence.json_catalog_registry import DEFAULT_CATALOG_PATH


class Settings(BaseSettings):
    catalog_path: Path = DEFAULT_CATALOG_PATH
    report_timezone: str = "UTC"  # calendar days of the daily series
    seed_orders_path: Path | None = None  # optional snapshot loaded at startup

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    host: str = "127.0.0.1"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_prefix="FOODOPS_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
