"""
Configuration settings for the Sales Query engine.

Uses Pydantic Settings to load environment variables for the dataset location,
logging, and query defaults applied when a caller leaves a parameter out.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Dataset
    data_path: Optional[Path] = Field(None, alias="SALES_DATA_PATH")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Query defaults
    default_page_size: int = Field(10, alias="DEFAULT_PAGE_SIZE")
    default_sort_by: str = Field("date", alias="DEFAULT_SORT_BY")
    default_sort_order: str = Field("desc", alias="DEFAULT_SORT_ORDER")
    search_fields: List[str] = Field(
        default_factory=lambda: ["customerName", "phoneNumber"], alias="SEARCH_FIELDS"
    )

    # Benchmark defaults
    benchmark_runs: int = Field(20, alias="BENCHMARK_RUNS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
