"""Common dependency helpers.

The settings and the process-wide clients are created once by the
application lifespan and stored on ``app.state``; handlers only read them.
"""
from __future__ import annotations

from fastapi import Request

from .config import Settings
from .infrastructure.embeddings.base import EmbeddingClient
from .infrastructure.llm.base import LLMClient
from .infrastructure.vectorstore.base import VectorStore


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    return request.app.state.settings


def get_vector_store(request: Request) -> VectorStore:
    return request.app.state.vector_store


def get_embedding_client(request: Request) -> EmbeddingClient:
    return request.app.state.embedder


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm


__all__ = ["get_settings", "get_vector_store", "get_embedding_client", "get_llm_client"]
