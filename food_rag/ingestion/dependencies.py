"""Dependencies for ingestion module."""
from __future__ import annotations

from fastapi import Depends

from ..config import Settings
from ..dependencies import get_embedding_client, get_settings, get_vector_store
from ..infrastructure.embeddings.base import EmbeddingClient
from ..infrastructure.vectorstore.base import VectorStore
from .service import IngestionService


def get_ingestion_service(
    settings: Settings = Depends(get_settings),
    vector_store: VectorStore = Depends(get_vector_store),
    embedder: EmbeddingClient = Depends(get_embedding_client),
) -> IngestionService:
    return IngestionService(vector_store, embedder, settings.rag.dataset_path)


__all__ = ["get_ingestion_service"]
