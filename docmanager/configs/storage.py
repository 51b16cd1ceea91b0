"""
Blob storage and upload configuration.

Settings for where uploaded document bytes are persisted (local disk or S3)
and the limits applied to multipart uploads.

Dependencies: pydantic_settings
System role: Blob storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for the blob store backing uploaded documents."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="local",
        description="Blob store backend: 'local' or 's3'",
    )
    upload_path: str = Field(
        default="./uploads",
        description="Directory for the local blob store",
    )
    s3_bucket: str = Field(
        default="doc-management-uploads",
        description="S3 bucket for the s3 blob store",
    )
    s3_region: str = Field(
        default="us-east-1",
        description="AWS region for the S3 bucket",
    )


class UploadSettings(BaseSettings):
    """Limits applied to document uploads."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UPLOAD_",
        case_sensitive=False,
        extra="ignore",
    )

    max_file_size: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum upload size in bytes (default 10MB)",
    )
