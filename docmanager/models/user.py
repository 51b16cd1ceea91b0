"""
User domain models and schemas.

Request/response schemas for user management.

Dependencies: pydantic
System role: User API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from docmanager.core.roles import UserRole
from docmanager.models.common import EMAIL_PATTERN, CamelModel


class CreateUserRequest(CamelModel):
    """Request schema for an admin creating a user with an explicit role."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255, description="Login email")
    password: str = Field(..., min_length=6, max_length=128, description="Plaintext password")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = Field(default=UserRole.VIEWER, description="Initial role")


class UpdateUserRequest(CamelModel):
    """Partial profile update; only provided fields change."""

    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    password: str | None = Field(None, min_length=6, max_length=128)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    role: UserRole | None = Field(None, description="Admin only, never on own account")


class UpdateUserRoleRequest(CamelModel):
    role: UserRole


class UserResponse(CamelModel):
    """Public user representation (never includes the password hash)."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime
