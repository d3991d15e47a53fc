"""Schemas for ingestion endpoints."""
from __future__ import annotations

from pydantic import BaseModel, Field


class IngestionRequest(BaseModel):
    force: bool = Field(False, description="Re-embed entries that are already stored.")


class IngestionResponse(BaseModel):
    total: int
    added: int
    skipped: int


class DocumentIdsResponse(BaseModel):
    ids: list[str]
    count: int


class DeleteDocumentsRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


__all__ = ["IngestionRequest", "IngestionResponse", "DocumentIdsResponse", "DeleteDocumentsRequest"]
