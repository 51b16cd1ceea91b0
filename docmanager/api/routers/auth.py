"""
Authentication API endpoints.

Routes:
- POST /auth/register - Create a viewer account and return a token
- POST /auth/login - Exchange credentials for a token
- POST /auth/logout - Acknowledge logout (tokens are stateless)

Dependencies: docmanager.application.services, docmanager.models
System role: Authentication HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from docmanager.api.deps.dependencies import get_auth_service, get_current_actor
from docmanager.api.routers.router_utils import handle_service_errors
from docmanager.application.services.auth_service import AuthService
from docmanager.core.authorization import Actor
from docmanager.models.auth import AuthResponse, LoginRequest, RegisterRequest
from docmanager.models.common import MessageResponse
from docmanager.models.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
@handle_service_errors
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new account with the viewer role.

    Raises:
        HTTPException(409): Email already registered
    """
    token, user = await auth_service.register(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    return AuthResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
@handle_service_errors
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Log in with email and password.

    Raises:
        HTTPException(401): Invalid credentials or inactive account
    """
    token, user = await auth_service.login(request.email, request.password)
    return AuthResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(actor: Actor = Depends(get_current_actor)) -> MessageResponse:
    """Log out. Tokens are stateless; clients discard theirs."""
    logger.info("User logged out", extra={"user_id": str(actor.id)})
    return MessageResponse(message="Logout successful")
