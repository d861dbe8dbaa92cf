"""
Configuration module using pydantic-settings.

Loads settings from environment variables with sensible defaults.
"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SLEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_title: str = "Sleeper Trade Finder API"
    api_version: str = "0.1.0"
    api_description: str = "Trade recommendations and valuation for Sleeper leagues"
    debug: bool = False
    log_level: str = "INFO"

    # Sleeper API
    sleeper_base_url: str = "https://api.sleeper.app/v1"
    sleeper_timeout: float = 30.0

    # Cache Settings
    players_cache_ttl: int = 3600  # 1 hour in seconds
    stats_cache_ttl: int = 900

    # Default Season (can be overridden per request)
    default_season: int = 2024

    # Trade engine
    max_recommendations: int = 15
    max_candidates_examined: int = 5000

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the API server or CLI."""
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
