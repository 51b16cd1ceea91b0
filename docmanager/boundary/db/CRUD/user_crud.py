"""
User CRUD operations.

Identity store queries: lookup by email, role and active-flag updates.

Dependencies: sqlalchemy, docmanager.boundary.db.models.user_model
System role: User persistence operations for auth and user management
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docmanager.boundary.db.CRUD.base_crud import BaseCRUD
from docmanager.boundary.db.models.user_model import UserModel
from docmanager.core.roles import UserRole


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve a user by email, compared exactly as stored.

        Args:
            session: Async database session
            email: Login email

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, session: AsyncSession, email: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def update_role(
        self, session: AsyncSession, id: UUID, role: UserRole
    ) -> UserModel | None:
        return await self.update_by_id(session, id, role=role)

    async def set_active(
        self, session: AsyncSession, id: UUID, is_active: bool
    ) -> UserModel | None:
        return await self.update_by_id(session, id, is_active=is_active)


user_crud = UserCRUD()
