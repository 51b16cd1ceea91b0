"""
Authentication configuration settings.

Settings for bearer token issuance and password hashing, plus the
default administrator account created by the seed script.

Dependencies: pydantic_settings
System role: Authentication configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """JWT and password hashing configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(
        default="change-me-in-production",
        description="HMAC secret used to sign access tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Access token lifetime in minutes",
    )
    password_hash_rounds: int = Field(
        default=12,
        description="bcrypt cost factor for new password hashes",
    )


class SeedSettings(BaseSettings):
    """Default administrator created by the seed script."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SEED_ADMIN_",
        case_sensitive=False,
        extra="ignore",
    )

    email: str = Field(default="admin@example.com", description="Admin email")
    password: str = Field(default="admin123", description="Admin password")
    first_name: str = Field(default="Admin", description="Admin first name")
    last_name: str = Field(default="User", description="Admin last name")
