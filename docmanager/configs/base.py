"""
Base configuration settings for the document service.

Every concern-specific settings class (database, storage, auth, ingestion)
inherits the shared ``.env`` loading and the process-wide fields below.
Unprefixed variables: APP_NAME, ENVIRONMENT, DEBUG, LOG_LEVEL.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BaseSettings(PydanticBaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="Document Management API",
        description="Title reported by the OpenAPI schema",
    )
    environment: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(
        default=False,
        description="Force DEBUG logging regardless of log_level",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
