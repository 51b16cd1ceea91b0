"""
Ingestion job API endpoints.

Routes:
- POST /ingestion/jobs - Submit a document for ingestion
- GET /ingestion/jobs - List jobs (own documents, or all for admins)
- GET /ingestion/jobs/{id} - Get job
- PATCH /ingestion/jobs/{id} - Update job (admin)
- POST /ingestion/jobs/{id}/cancel - Cancel job (owner or admin)
- DELETE /ingestion/jobs/{id} - Delete job (admin)
- POST /ingestion/webhook/{job_id} - Processor status callback (no auth)

Dependencies: docmanager.application.services, docmanager.models
System role: Ingestion job HTTP API (polling and webhook)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from docmanager.api.deps.dependencies import get_current_actor, get_ingestion_service
from docmanager.api.routers.router_utils import handle_service_errors
from docmanager.application.services.ingestion_service import IngestionService
from docmanager.core.authorization import Actor
from docmanager.models.ingestion import (
    CreateIngestionJobRequest,
    IngestionJobResponse,
    IngestionWebhookRequest,
    UpdateIngestionJobRequest,
)

router = APIRouter(prefix="/ingestion", tags=["ingestion"])


@router.post("/jobs", response_model=IngestionJobResponse, status_code=201)
@handle_service_errors
async def create_job(
    request: CreateIngestionJobRequest,
    actor: Actor = Depends(get_current_actor),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionJobResponse:
    """
    Submit a document for ingestion.

    The job starts PENDING and the document moves to "processing".

    Raises:
        HTTPException(404): Document not found
        HTTPException(403): Document belongs to another user
        HTTPException(400): Document is already being processed
    """
    job = await ingestion_service.create_job(request.document_id, actor, request.config)
    return IngestionJobResponse.model_validate(job)


@router.get("/jobs", response_model=list[IngestionJobResponse])
@handle_service_errors
async def list_jobs(
    actor: Actor = Depends(get_current_actor),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> list[IngestionJobResponse]:
    jobs = await ingestion_service.list_jobs(actor)
    return [IngestionJobResponse.model_validate(j) for j in jobs]


@router.get("/jobs/{job_id}", response_model=IngestionJobResponse)
@handle_service_errors
async def get_job(
    job_id: UUID,
    actor: Actor = Depends(get_current_actor),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionJobResponse:
    """Poll a job's status."""
    job = await ingestion_service.get_job(job_id, actor)
    return IngestionJobResponse.model_validate(job)


@router.patch("/jobs/{job_id}", response_model=IngestionJobResponse)
@handle_service_errors
async def update_job(
    job_id: UUID,
    request: UpdateIngestionJobRequest,
    actor: Actor = Depends(get_current_actor),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionJobResponse:
    """
    Merge status, errorMessage and result into a job (admin only).

    Raises:
        HTTPException(404): Job not found
        HTTPException(403): Not an admin
        HTTPException(400): Status change not allowed
    """
    job = await ingestion_service.update_job(
        job_id, request.model_dump(exclude_unset=True), actor
    )
    return IngestionJobResponse.model_validate(job)


@router.post("/jobs/{job_id}/cancel", response_model=IngestionJobResponse)
@handle_service_errors
async def cancel_job(
    job_id: UUID,
    actor: Actor = Depends(get_current_actor),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionJobResponse:
    job = await ingestion_service.cancel_job(job_id, actor)
    return IngestionJobResponse.model_validate(job)


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_service_errors
async def delete_job(
    job_id: UUID,
    actor: Actor = Depends(get_current_actor),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> Response:
    await ingestion_service.delete_job(job_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/webhook/{job_id}", response_model=IngestionJobResponse)
@handle_service_errors
async def ingestion_webhook(
    job_id: UUID,
    request: IngestionWebhookRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionJobResponse:
    """
    Receive a status report from an external processor.

    Unauthenticated. Terminal statuses cascade to the document.
    """
    job = await ingestion_service.handle_webhook(
        job_id, request.model_dump(exclude_unset=True)
    )
    return IngestionJobResponse.model_validate(job)
