"""
Ingestion simulation configuration.

Delays used by the in-process simulated processor that advances
ingestion jobs to running and then completed.

Dependencies: pydantic_settings
System role: Ingestion engine configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Simulated ingestion processor settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    simulation_enabled: bool = Field(
        default=True,
        description="Schedule simulated progress for newly created jobs",
    )
    running_delay_seconds: float = Field(
        default=1.0,
        description="Delay before a new job is advanced to running",
    )
    completion_delay_seconds: float = Field(
        default=5.0,
        description="Delay between running and completed",
    )
