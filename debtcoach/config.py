"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "DebtCoach Calculation Engine"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Analytics
    upcoming_payment_days: int = 30

    # Request size limits
    max_debts_per_request: int = 100
    max_loans_per_comparison: int = 20


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
