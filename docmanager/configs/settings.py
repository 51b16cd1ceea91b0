"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from docmanager.configs.auth import AuthSettings, SeedSettings
from docmanager.configs.base import BaseSettings
from docmanager.configs.database import DatabaseSettings
from docmanager.configs.ingestion import IngestionSettings
from docmanager.configs.storage import StorageSettings, UploadSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()
    upload: UploadSettings = UploadSettings()
    auth: AuthSettings = AuthSettings()
    seed: SeedSettings = SeedSettings()
    ingestion: IngestionSettings = IngestionSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from docmanager.configs import get_settings
        settings = get_settings()
    """
    return Settings()
