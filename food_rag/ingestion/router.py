"""Ingestion endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from .dependencies import get_ingestion_service
from .schemas import DeleteDocumentsRequest, DocumentIdsResponse, IngestionRequest, IngestionResponse
from .service import IngestionService

router = APIRouter()


@router.post("/foods", response_model=IngestionResponse)
async def ingest_foods(
    payload: IngestionRequest | None = None,
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResponse:
    summary = await service.ingest(force=bool(payload and payload.force))
    return IngestionResponse(total=summary.total, added=summary.added, skipped=summary.skipped)


@router.get("/documents", response_model=DocumentIdsResponse)
async def list_documents(service: IngestionService = Depends(get_ingestion_service)) -> DocumentIdsResponse:
    ids = await service.existing_ids()
    return DocumentIdsResponse(ids=ids, count=len(ids))


@router.post("/documents/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_documents(
    payload: DeleteDocumentsRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> None:
    await service.delete(payload.ids)


@router.delete("/documents", status_code=status.HTTP_204_NO_CONTENT)
async def reset_documents(service: IngestionService = Depends(get_ingestion_service)) -> None:
    await service.reset()


__all__ = ["router"]
