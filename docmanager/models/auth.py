"""
Authentication schemas.

Dependencies: pydantic
System role: Register/login API contracts
"""

from pydantic import Field

from docmanager.models.common import EMAIL_PATTERN, CamelModel
from docmanager.models.user import UserResponse


class RegisterRequest(CamelModel):
    """Self-service registration; new accounts get the viewer role."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(CamelModel):
    """Bearer token plus the authenticated user."""

    access_token: str = Field(..., alias="access_token")
    user: UserResponse
