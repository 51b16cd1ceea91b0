"""
Test suite for DocumentCRUD against SQLite.

Tests owner-scoped listing, status updates and the atomic processing claim.

System role: Verification of document persistence layer
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from docmanager.boundary.db.CRUD.document_crud import document_crud
from docmanager.boundary.db.models.document_model import DocumentStatus
from docmanager.core.roles import UserRole


class TestDocumentCRUDGetByOwner:
    @pytest.mark.asyncio
    async def test_filters_by_owner(
        self, test_async_db: AsyncSession, make_user, make_document
    ) -> None:
        # Arrange
        alice = await make_user(test_async_db, UserRole.EDITOR)
        bob = await make_user(test_async_db, UserRole.VIEWER)
        mine = await make_document(test_async_db, alice)
        await make_document(test_async_db, bob)

        # Act
        docs = await document_crud.get_by_owner(test_async_db, alice.id)

        # Assert
        assert [d.id for d in docs] == [mine.id]

    @pytest.mark.asyncio
    async def test_none_owner_returns_everything(
        self, test_async_db: AsyncSession, make_user, make_document
    ) -> None:
        alice = await make_user(test_async_db)
        bob = await make_user(test_async_db)
        await make_document(test_async_db, alice)
        await make_document(test_async_db, bob)

        docs = await document_crud.get_by_owner(test_async_db, None)

        assert len(docs) == 2


class TestDocumentCRUDStatus:
    @pytest.mark.asyncio
    async def test_update_status(self, test_async_db: AsyncSession, make_user, make_document) -> None:
        owner = await make_user(test_async_db)
        document = await make_document(test_async_db, owner)

        updated = await document_crud.update_status(
            test_async_db, document.id, DocumentStatus.FAILED
        )

        assert updated.status == DocumentStatus.FAILED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status",
        [DocumentStatus.UPLOADED, DocumentStatus.PROCESSED, DocumentStatus.FAILED],
    )
    async def test_claim_succeeds_when_not_processing(
        self, test_async_db: AsyncSession, make_user, make_document, status
    ) -> None:
        owner = await make_user(test_async_db)
        document = await make_document(test_async_db, owner, status)

        claimed = await document_crud.claim_for_processing(test_async_db, document.id)
        await test_async_db.commit()

        assert claimed is True
        refreshed = await document_crud.get_by_id(test_async_db, document.id)
        assert refreshed.status == DocumentStatus.PROCESSING

    @pytest.mark.asyncio
    async def test_second_claim_fails(
        self, test_async_db: AsyncSession, make_user, make_document
    ) -> None:
        owner = await make_user(test_async_db)
        document = await make_document(test_async_db, owner)

        first = await document_crud.claim_for_processing(test_async_db, document.id)
        second = await document_crud.claim_for_processing(test_async_db, document.id)

        assert (first, second) == (True, False)

    @pytest.mark.asyncio
    async def test_claim_unknown_document_fails(self, test_async_db: AsyncSession) -> None:
        import uuid

        assert await document_crud.claim_for_processing(test_async_db, uuid.uuid4()) is False
