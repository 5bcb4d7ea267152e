"""Configuration management for Smart Allocation."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SMART_ALLOCATION_",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shape-scoring network
    seed: int = Field(
        default=42,
        description="Seed for the per-run random shape-scoring weights",
    )
    hidden_size: int = Field(
        default=12,
        ge=1,
        le=256,
        description="Hidden layer width of the shape-scoring network",
    )

    # Feature normalization
    aptitude_max: float = Field(
        default=10.0,
        gt=0,
        description="Maximum possible aptitude score (CGPA scale)",
    )
    portfolio_cap: int = Field(
        default=5,
        ge=1,
        description="Portfolio strength values are clipped to this cap",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
