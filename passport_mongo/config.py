"""
Driver configuration loaded from environment variables.
"""
import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Driver settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PASSPORT_MONGO_",
        env_file=".env",
        extra="ignore",
    )

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "passport"

    # Collections
    user_table_name: str = "users"
    config_table_name: str = "apolloPassportConfig"

    # Startup behaviour
    init: bool = True
    create_indexes: bool = False

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding the driver.

    The driver itself only creates module loggers; call this from the
    host application's entry point if it has no logging setup of its own.
    """
    if level is None:
        level = get_settings().log_level

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
