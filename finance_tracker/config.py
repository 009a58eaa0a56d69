"""
Application configuration using Pydantic Settings.

Every field can be overridden with a ``FINANCE_``-prefixed environment
variable, e.g. ``FINANCE_DATABASE_URL``.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Pick the env file for the current deployment."""
    if os.getenv("FINANCE_APP_ENV", "development") == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Record store
    database_url: str = "sqlite:///./finance.db"

    # App settings
    app_name: str = "Personal Finance Tracker"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Forecast assumptions (percent) used until the user saves their own
    default_savings_rate: float = 30.0
    default_inflation_rate: float = 7.0
    default_investment_return: float = 20.0
    default_projection_years: int = 20

    class Config:
        env_prefix = "FINANCE_"
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
