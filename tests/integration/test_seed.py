"""
Test suite for the default administrator seed.

System role: Verification of idempotent bootstrap data
"""

import pytest

from docmanager.boundary.db.CRUD.user_crud import user_crud
from docmanager.boundary.db.seed import seed_admin
from docmanager.configs import get_settings
from docmanager.core.roles import UserRole
from docmanager.core.security import verify_password


class TestSeedAdmin:
    @pytest.mark.asyncio
    async def test_creates_admin_once(self, session_factory) -> None:
        # Act
        first = await seed_admin(session_factory)
        second = await seed_admin(session_factory)

        # Assert
        assert first.id == second.id
        assert first.role == UserRole.ADMIN

        async with session_factory() as session:
            stored = await user_crud.get_by_email(session, get_settings().seed.email)
            users = await user_crud.get_all(session)
        assert len(users) == 1
        assert verify_password(get_settings().seed.password, stored.password_hash)
