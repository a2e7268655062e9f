"""Configuration loading for the alt-lru benchmark and validation tools."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration derived from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ALT_LRU_",
        env_file=".env",
        extra="ignore",
    )

    capacity: int = Field(30, ge=1, description="Cache capacity used by bench/validate")
    iterations: int = Field(10_000, ge=1, description="Keys put and read by the promote benchmark")
    threads: int = Field(1, ge=1, le=256, description="Worker threads for the promote benchmark")
    operations: int = Field(5_000, ge=1, description="Random operations replayed by validate")
    seed: int = Field(0, description="Seed for the validation workload")
    log_level: str = Field("INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
