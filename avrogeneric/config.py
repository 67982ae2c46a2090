"""
Configuration settings for avrogeneric.

Uses Pydantic Settings to load environment variables for logging, decoding
checks, and decode benchmark defaults.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Decoding
    check_time_range: bool = Field(True, alias="AVRO_CHECK_TIME_RANGE")

    # Benchmark defaults
    benchmark_records: int = Field(100_000, alias="BENCHMARK_RECORDS")
    benchmark_seed: int = Field(42, alias="BENCHMARK_SEED")
    benchmark_runs: int = Field(1, alias="BENCHMARK_RUNS")

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
