"""Dependencies for retrieval module."""
from __future__ import annotations

from fastapi import Depends

from ..config import Settings
from ..dependencies import get_embedding_client, get_llm_client, get_settings, get_vector_store
from ..infrastructure.embeddings.base import EmbeddingClient
from ..infrastructure.llm.base import LLMClient
from ..infrastructure.vectorstore.base import VectorStore
from .service import RAGService


def get_rag_service(
    settings: Settings = Depends(get_settings),
    vector_store: VectorStore = Depends(get_vector_store),
    embedder: EmbeddingClient = Depends(get_embedding_client),
    llm: LLMClient = Depends(get_llm_client),
) -> RAGService:
    return RAGService(
        vector_store,
        embedder,
        llm,
        default_results=settings.rag.default_results,
        max_results=settings.rag.max_results,
    )


__all__ = ["get_rag_service"]
