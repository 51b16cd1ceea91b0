"""
Document API endpoints.

Routes:
- POST /documents/upload - Multipart upload (file, description?, metadata?)
- GET /documents - List documents (own, or all for admins)
- GET /documents/{id} - Get document metadata
- GET /documents/{id}/download - Download stored file
- PATCH /documents/{id} - Update description/metadata (status: admin)
- PATCH /documents/{id}/status - Set status (admin)
- DELETE /documents/{id} - Delete record and file

Dependencies: docmanager.application.services, docmanager.models
System role: Document management HTTP API
"""

import json
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from docmanager.api.deps.dependencies import get_current_actor, get_document_service
from docmanager.api.routers.router_utils import handle_service_errors
from docmanager.application.services.document_service import DocumentService
from docmanager.core.authorization import Actor
from docmanager.core.exceptions import BadRequestError
from docmanager.models.document import (
    DocumentResponse,
    UpdateDocumentRequest,
    UpdateDocumentStatusRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def _parse_metadata(raw: str | None) -> dict | None:
    """Decode the multipart ``metadata`` field (a JSON object string)."""
    if raw is None or raw == "":
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BadRequestError("metadata must be a valid JSON object") from e
    if not isinstance(value, dict):
        raise BadRequestError("metadata must be a valid JSON object")
    return value


@router.post("/upload", response_model=DocumentResponse, status_code=201)
@handle_service_errors
async def upload_document(
    file: UploadFile | None = File(None),
    description: str | None = Form(None),
    metadata: str | None = Form(None),
    actor: Actor = Depends(get_current_actor),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Upload a document.

    Args:
        file: Uploaded file (multipart/form-data)
        description: Optional free text
        metadata: Optional JSON object encoded as a string
        actor: Authenticated uploader
        document_service: Injected DocumentService

    Returns:
        DocumentResponse: Created document with status "uploaded"

    Raises:
        HTTPException(400): Missing/empty file or malformed metadata
        HTTPException(413): File exceeds the upload size limit
    """
    if file is None or not file.filename:
        raise BadRequestError("No file provided")

    parsed_metadata = _parse_metadata(metadata)
    content = await file.read()

    logger.info(
        "Document upload received",
        extra={"original_name": file.filename, "size": len(content)},
    )

    document = await document_service.upload_document(
        actor,
        original_name=file.filename,
        mime_type=file.content_type or "application/octet-stream",
        content=content,
        description=description,
        metadata=parsed_metadata,
    )
    return DocumentResponse.from_model(document)


@router.get("", response_model=list[DocumentResponse])
@handle_service_errors
async def list_documents(
    actor: Actor = Depends(get_current_actor),
    document_service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    documents = await document_service.list_documents(actor)
    return [DocumentResponse.from_model(d) for d in documents]


@router.get("/{document_id}", response_model=DocumentResponse)
@handle_service_errors
async def get_document(
    document_id: UUID,
    actor: Actor = Depends(get_current_actor),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Get a document by ID.

    Raises:
        HTTPException(404): Document not found
        HTTPException(403): Neither owner nor admin
    """
    document = await document_service.find_document(document_id, actor)
    return DocumentResponse.from_model(document)


@router.get("/{document_id}/download")
@handle_service_errors
async def download_document(
    document_id: UUID,
    actor: Actor = Depends(get_current_actor),
    document_service: DocumentService = Depends(get_document_service),
) -> Response:
    """Stream the stored file back with its original name."""
    document, content = await document_service.read_document_content(document_id, actor)
    return Response(
        content=content,
        media_type=document.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{document.original_name}"'
        },
    )


@router.patch("/{document_id}", response_model=DocumentResponse)
@handle_service_errors
async def update_document(
    document_id: UUID,
    request: UpdateDocumentRequest,
    actor: Actor = Depends(get_current_actor),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Update description and metadata; ``status`` requires admin.

    Raises:
        HTTPException(404): Document not found
        HTTPException(403): Neither owner nor admin, or status by non-admin
    """
    document = await document_service.update_document(
        document_id, request.model_dump(exclude_unset=True), actor
    )
    return DocumentResponse.from_model(document)


@router.patch("/{document_id}/status", response_model=DocumentResponse)
@handle_service_errors
async def set_document_status(
    document_id: UUID,
    request: UpdateDocumentStatusRequest,
    actor: Actor = Depends(get_current_actor),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = await document_service.set_document_status(
        document_id, request.status, actor
    )
    return DocumentResponse.from_model(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_service_errors
async def delete_document(
    document_id: UUID,
    actor: Actor = Depends(get_current_actor),
    document_service: DocumentService = Depends(get_document_service),
) -> Response:
    await document_service.delete_document(document_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
