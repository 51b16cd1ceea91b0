"""
User management API endpoints.

Routes:
- POST /users - Create user with role (admin)
- GET /users - List users (admin)
- GET /users/me - Own profile
- PATCH /users/me - Update own profile
- GET /users/{id} - Get user (self or admin)
- PATCH /users/{id} - Update profile (self or admin)
- PATCH /users/{id}/role - Change role (admin, not self)
- PATCH /users/{id}/status - Toggle active flag (admin, not self)
- DELETE /users/{id} - Delete user (admin, not self)

Dependencies: docmanager.application.services, docmanager.models
System role: User management HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from docmanager.api.deps.dependencies import get_current_actor, get_user_service
from docmanager.api.routers.router_utils import handle_service_errors
from docmanager.application.services.user_service import UserService
from docmanager.core.authorization import Actor
from docmanager.models.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UpdateUserRoleRequest,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
@handle_service_errors
async def create_user(
    request: CreateUserRequest,
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a user with an explicit role (admin only)."""
    user = await user_service.create_user(
        actor,
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        role=request.role,
    )
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
@handle_service_errors
async def list_users(
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """List every user (admin only)."""
    users = await user_service.list_users(actor)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/me", response_model=UserResponse)
@handle_service_errors
async def get_me(
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await user_service.get_user(actor.id, actor)
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse)
@handle_service_errors
async def update_me(
    request: UpdateUserRequest,
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await user_service.update_user(
        actor.id, request.model_dump(exclude_unset=True), actor
    )
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
@handle_service_errors
async def get_user(
    user_id: UUID,
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Get a user by ID.

    Raises:
        HTTPException(404): User not found
        HTTPException(403): Neither the user nor an admin
    """
    user = await user_service.get_user(user_id, actor)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
@handle_service_errors
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Update a user's profile; ``role`` is honoured for admins on other users.

    Raises:
        HTTPException(404): User not found
        HTTPException(403): Not allowed to update this user or role
        HTTPException(409): Email already registered
    """
    user = await user_service.update_user(
        user_id, request.model_dump(exclude_unset=True), actor
    )
    return UserResponse.model_validate(user)


@router.patch("/{user_id}/role", response_model=UserResponse)
@handle_service_errors
async def change_user_role(
    user_id: UUID,
    request: UpdateUserRoleRequest,
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await user_service.change_role(user_id, request.role, actor)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}/status", response_model=UserResponse)
@handle_service_errors
async def toggle_user_status(
    user_id: UUID,
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Flip the user's active flag."""
    user = await user_service.toggle_status(user_id, actor)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_service_errors
async def delete_user(
    user_id: UUID,
    actor: Actor = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service),
) -> Response:
    await user_service.delete_user(user_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
