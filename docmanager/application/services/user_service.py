"""
User service orchestrator.

Coordinates user management: admin account creation, profile reads and
updates, role changes, activation toggles and deletion. Every entry point
resolves the target user first, then consults the authorization policy.

Dependencies: docmanager.boundary.db.CRUD, docmanager.core.authorization
System role: User management use case orchestration
"""

import logging
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docmanager.boundary.db.CRUD.user_crud import user_crud
from docmanager.boundary.db.models.user_model import UserModel
from docmanager.core.authorization import Action, Actor, authorize
from docmanager.core.exceptions import ConflictError, NotFoundError
from docmanager.core.roles import UserRole
from docmanager.core.security import hash_password

logger = logging.getLogger(__name__)


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession, hash_rounds: int = 12) -> None:
        """
        Initialize user service with async database session.

        Args:
            db: Async SQLAlchemy session
            hash_rounds: bcrypt cost factor for new password hashes
        """
        self.db = db
        self.hash_rounds = hash_rounds

    async def _get_user_or_404(self, user_id: UUID) -> UserModel:
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def create_user(
        self,
        actor: Actor,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.VIEWER,
    ) -> UserModel:
        """
        Create a user with an explicit role (admin only).

        Raises:
            ForbiddenError: If the actor is not an admin
            ConflictError: If the email is already registered
        """
        authorize(actor, Action.CREATE_USER)
        if await user_crud.email_exists(self.db, email):
            raise ConflictError(
                "User with this email already exists", details={"email": email}
            )

        user = await user_crud.create(
            self.db,
            email=email,
            password_hash=hash_password(password, self.hash_rounds),
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=True,
        )
        await self.db.commit()
        logger.info(
            "User created",
            extra={"user_id": str(user.id), "role": role.value, "actor_id": str(actor.id)},
        )
        return user

    async def list_users(self, actor: Actor) -> Sequence[UserModel]:
        """
        List every user (admin only).

        Raises:
            ForbiddenError: If the actor is not an admin
        """
        authorize(actor, Action.LIST_USERS)
        return await user_crud.get_all(self.db)

    async def get_user(self, user_id: UUID, actor: Actor) -> UserModel:
        """
        Get a user record; users may read themselves, admins anyone.

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the actor is neither the user nor an admin
        """
        user = await self._get_user_or_404(user_id)
        authorize(actor, Action.READ_USER, user.id)
        return user

    async def update_user(
        self,
        user_id: UUID,
        changes: dict[str, Any],
        actor: Actor,
    ) -> UserModel:
        """
        Update profile fields of a user.

        Args:
            user_id: Target user UUID
            changes: Provided fields among email, password, first_name,
                last_name and role
            actor: Authenticated user

        Returns:
            UserModel: Updated user

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: Profile of another user (non-admin), or a role
                change by a non-admin or on the actor's own account
            ConflictError: If the new email is already registered
        """
        user = await self._get_user_or_404(user_id)
        authorize(actor, Action.UPDATE_USER_PROFILE, user.id)

        fields = {key: value for key, value in changes.items() if value is not None}
        if "role" in fields:
            authorize(actor, Action.CHANGE_USER_ROLE, user.id)
        if "email" in fields and fields["email"] != user.email:
            if await user_crud.email_exists(self.db, fields["email"]):
                raise ConflictError(
                    "User with this email already exists",
                    details={"email": fields["email"]},
                )
        if "password" in fields:
            fields["password_hash"] = hash_password(
                fields.pop("password"), self.hash_rounds
            )

        if not fields:
            return user

        updated = await user_crud.update_by_id(self.db, user.id, **fields)
        await self.db.commit()
        logger.info(
            "User updated",
            extra={
                "user_id": str(user.id),
                "fields": sorted(k for k in fields if k != "password_hash"),
                "actor_id": str(actor.id),
            },
        )
        return updated

    async def change_role(self, user_id: UUID, role: UserRole, actor: Actor) -> UserModel:
        """
        Change a user's role (admin only, never the admin's own role).

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the actor is not an admin or targets themselves
        """
        user = await self._get_user_or_404(user_id)
        authorize(actor, Action.CHANGE_USER_ROLE, user.id)

        updated = await user_crud.update_role(self.db, user.id, role)
        await self.db.commit()
        logger.info(
            "User role changed",
            extra={"user_id": str(user.id), "role": role.value, "actor_id": str(actor.id)},
        )
        return updated

    async def toggle_status(self, user_id: UUID, actor: Actor) -> UserModel:
        """
        Flip a user's active flag (admin only, never the admin's own account).

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the actor is not an admin or targets themselves
        """
        user = await self._get_user_or_404(user_id)
        authorize(actor, Action.TOGGLE_USER_STATUS, user.id)

        updated = await user_crud.set_active(self.db, user.id, not user.is_active)
        await self.db.commit()
        logger.info(
            "User status toggled",
            extra={
                "user_id": str(user.id),
                "is_active": updated.is_active,
                "actor_id": str(actor.id),
            },
        )
        return updated

    async def delete_user(self, user_id: UUID, actor: Actor) -> None:
        """
        Hard-delete a user and, by cascade, their documents and jobs.

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the actor is not an admin or targets themselves
        """
        user = await self._get_user_or_404(user_id)
        authorize(actor, Action.DELETE_USER, user.id)

        await user_crud.delete_by_id(self.db, user.id)
        await self.db.commit()
        logger.info(
            "User deleted", extra={"user_id": str(user_id), "actor_id": str(actor.id)}
        )
