"""
Test suite for BaseCRUD generic database operations.

Tests basic CRUD functionality: create, read (by ID and all), update, delete, exists.
Uses SQLAlchemy session mocks to verify call sequencing.

System role: Verification of generic database layer foundation
"""

import uuid
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from docmanager.boundary.db.CRUD.base_crud import BaseCRUD
from docmanager.boundary.db.models.user_model import UserModel


@pytest.fixture
def base_crud() -> BaseCRUD:
    """Provide BaseCRUD instance for testing."""
    return BaseCRUD(UserModel)


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def sample_id() -> uuid.UUID:
    """Provide sample UUID for testing."""
    return uuid.uuid4()


def _result_returning(value: Any) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=value)
    return result


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    @pytest.mark.asyncio
    async def test_create_should_flush_before_refresh(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Test flush is called before refresh to ensure ID generation."""
        # Arrange
        call_order = []

        async def flush_effect() -> None:
            call_order.append("flush")

        async def refresh_effect(obj: Any) -> None:
            call_order.append("refresh")

        mock_session.flush = AsyncMock(side_effect=flush_effect)
        mock_session.refresh = AsyncMock(side_effect=refresh_effect)

        # Act
        instance = await base_crud.create(mock_session, email="a@example.com")

        # Assert
        mock_session.add.assert_called_once_with(instance)
        assert call_order == ["flush", "refresh"]
        assert instance.email == "a@example.com"


class TestBaseCRUDUpdateByID:
    """Test suite for BaseCRUD.update_by_id() method."""

    @pytest.mark.asyncio
    async def test_update_should_set_attributes_and_flush(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        # Arrange
        instance = UserModel(email="old@example.com")
        mock_session.execute = AsyncMock(return_value=_result_returning(instance))

        # Act
        result = await base_crud.update_by_id(mock_session, sample_id, email="new@example.com")

        # Assert
        assert result is instance
        assert instance.email == "new@example.com"
        mock_session.flush.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(instance)

    @pytest.mark.asyncio
    async def test_update_should_return_none_when_not_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        mock_session.execute = AsyncMock(return_value=_result_returning(None))

        result = await base_crud.update_by_id(mock_session, sample_id, email="x@example.com")

        assert result is None
        mock_session.flush.assert_not_awaited()


class TestBaseCRUDDeleteByID:
    """Test suite for BaseCRUD.delete_by_id() method."""

    @pytest.mark.asyncio
    async def test_delete_should_return_true_when_deleted(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        instance = UserModel(email="a@example.com")
        mock_session.execute = AsyncMock(return_value=_result_returning(instance))

        assert await base_crud.delete_by_id(mock_session, sample_id) is True
        mock_session.delete.assert_awaited_once_with(instance)

    @pytest.mark.asyncio
    async def test_delete_should_return_false_when_not_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        mock_session.execute = AsyncMock(return_value=_result_returning(None))

        assert await base_crud.delete_by_id(mock_session, sample_id) is False
        mock_session.delete.assert_not_awaited()


class TestBaseCRUDExists:
    """Test suite for BaseCRUD.exists() method."""

    @pytest.mark.asyncio
    async def test_exists_should_reflect_query_result(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        mock_session.execute = AsyncMock(return_value=_result_returning(sample_id))

        assert await base_crud.exists(mock_session, sample_id) is True
