"""
Test suite for UserService.

System role: Verification of user management rules
"""

import uuid

import pytest

from docmanager.application.services.user_service import UserService
from docmanager.boundary.db.CRUD import document_crud
from docmanager.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from docmanager.core.roles import UserRole
from docmanager.core.security import verify_password


@pytest.fixture
def service(db_session) -> UserService:
    return UserService(db_session, hash_rounds=4)


@pytest.fixture
async def admin(db_session, make_user):
    return await make_user(db_session, UserRole.ADMIN)


@pytest.fixture
async def viewer(db_session, make_user):
    return await make_user(db_session, UserRole.VIEWER)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_admin_creates_user_with_role(self, service, admin, as_actor) -> None:
        # Act
        user = await service.create_user(
            as_actor(admin),
            email="editor@example.com",
            password="secret1",
            first_name="Ed",
            last_name="Itor",
            role=UserRole.EDITOR,
        )

        # Assert
        assert user.role == UserRole.EDITOR
        assert verify_password("secret1", user.password_hash)

    @pytest.mark.asyncio
    async def test_non_admin_cannot_create(self, service, viewer, as_actor) -> None:
        with pytest.raises(ForbiddenError):
            await service.create_user(
                as_actor(viewer),
                email="x@example.com",
                password="secret1",
                first_name="X",
                last_name="Y",
            )

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, service, admin, viewer, as_actor) -> None:
        with pytest.raises(ConflictError):
            await service.create_user(
                as_actor(admin),
                email=viewer.email,
                password="secret1",
                first_name="X",
                last_name="Y",
            )


class TestReadUsers:
    @pytest.mark.asyncio
    async def test_list_requires_admin(self, service, admin, viewer, as_actor) -> None:
        assert len(await service.list_users(as_actor(admin))) == 2
        with pytest.raises(ForbiddenError):
            await service.list_users(as_actor(viewer))

    @pytest.mark.asyncio
    async def test_user_reads_self_but_not_others(
        self, service, admin, viewer, as_actor
    ) -> None:
        assert (await service.get_user(viewer.id, as_actor(viewer))).id == viewer.id
        with pytest.raises(ForbiddenError):
            await service.get_user(admin.id, as_actor(viewer))

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, service, viewer, as_actor) -> None:
        with pytest.raises(NotFoundError, match="User not found"):
            await service.get_user(uuid.uuid4(), as_actor(viewer))


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_user_updates_own_profile_and_password(
        self, service, viewer, as_actor
    ) -> None:
        updated = await service.update_user(
            viewer.id, {"first_name": "New", "password": "changed1"}, as_actor(viewer)
        )

        assert updated.first_name == "New"
        assert verify_password("changed1", updated.password_hash)

    @pytest.mark.asyncio
    async def test_user_cannot_change_own_role(self, service, viewer, as_actor) -> None:
        with pytest.raises(ForbiddenError, match="Only admins can update user roles"):
            await service.update_user(viewer.id, {"role": UserRole.ADMIN}, as_actor(viewer))

    @pytest.mark.asyncio
    async def test_admin_changes_role_of_other_user(
        self, service, admin, viewer, as_actor
    ) -> None:
        updated = await service.update_user(
            viewer.id, {"role": UserRole.EDITOR}, as_actor(admin)
        )

        assert updated.role == UserRole.EDITOR

    @pytest.mark.asyncio
    async def test_email_conflict(self, service, admin, viewer, as_actor) -> None:
        with pytest.raises(ConflictError):
            await service.update_user(viewer.id, {"email": admin.email}, as_actor(viewer))


class TestAdminOperations:
    @pytest.mark.asyncio
    async def test_change_role(self, service, admin, viewer, as_actor) -> None:
        updated = await service.change_role(viewer.id, UserRole.EDITOR, as_actor(admin))

        assert updated.role == UserRole.EDITOR

    @pytest.mark.asyncio
    async def test_admin_cannot_change_own_role(self, service, admin, as_actor) -> None:
        with pytest.raises(ForbiddenError, match="You cannot change your own role"):
            await service.change_role(admin.id, UserRole.VIEWER, as_actor(admin))

    @pytest.mark.asyncio
    async def test_toggle_status_flips_flag(self, service, admin, viewer, as_actor) -> None:
        first = await service.toggle_status(viewer.id, as_actor(admin))
        assert first.is_active is False

        second = await service.toggle_status(viewer.id, as_actor(admin))
        assert second.is_active is True

    @pytest.mark.asyncio
    async def test_admin_cannot_deactivate_self(self, service, admin, as_actor) -> None:
        with pytest.raises(ForbiddenError, match="You cannot deactivate your own account"):
            await service.toggle_status(admin.id, as_actor(admin))

    @pytest.mark.asyncio
    async def test_delete_user_removes_documents(
        self, service, db_session, make_document, admin, viewer, as_actor
    ) -> None:
        document = await make_document(db_session, viewer)

        await service.delete_user(viewer.id, as_actor(admin))

        assert await document_crud.get_by_id(db_session, document.id) is None
        with pytest.raises(NotFoundError):
            await service.get_user(viewer.id, as_actor(admin))

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, service, admin, as_actor) -> None:
        with pytest.raises(ForbiddenError, match="You cannot delete your own account"):
            await service.delete_user(admin.id, as_actor(admin))

    @pytest.mark.asyncio
    async def test_viewer_cannot_delete_users(self, service, admin, viewer, as_actor) -> None:
        with pytest.raises(ForbiddenError, match="Only admins can delete users"):
            await service.delete_user(admin.id, as_actor(viewer))
