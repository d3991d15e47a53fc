"""Factory helpers for embedding clients."""
from __future__ import annotations

import logging

from ...config import Settings
from .base import EmbeddingClient
from .clarifai import ClarifaiEmbeddingClient
from .constants import resolve_embedding_dimension
from .local import LocalEmbeddingClient
from .ollama import OllamaEmbeddingClient

LOGGER = logging.getLogger(__name__)


def create_embedding_client(settings: Settings) -> EmbeddingClient:
    """Create an embedding client based on runtime configuration."""

    embedding_settings = settings.embeddings
    dimension = resolve_embedding_dimension(embedding_settings)
    provider = embedding_settings.provider
    if provider == "clarifai":
        if embedding_settings.clarifai_pat and embedding_settings.clarifai_model_url:
            return ClarifaiEmbeddingClient(
                pat=embedding_settings.clarifai_pat,
                model_url=embedding_settings.clarifai_model_url,
                dimension=dimension,
                request_timeout=embedding_settings.request_timeout,
            )
        LOGGER.warning(
            "Clarifai embeddings selected but EMBEDDINGS__CLARIFAI_PAT/EMBEDDINGS__CLARIFAI_MODEL_URL are missing; "
            "falling back to local embeddings"
        )
        return LocalEmbeddingClient(dimension=dimension)
    if provider == "ollama":
        return OllamaEmbeddingClient(
            host=embedding_settings.ollama_host,
            model_name=embedding_settings.model,
            request_timeout=embedding_settings.request_timeout,
            dimension=dimension,
        )
    return LocalEmbeddingClient(dimension=dimension)


__all__ = ["create_embedding_client"]
