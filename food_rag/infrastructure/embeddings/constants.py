"""Shared constants for embedding backends."""
from __future__ import annotations

from ...config import EmbeddingSettings

DEFAULT_EMBEDDING_DIMENSION = 1024

MODEL_DIMENSIONS = {
    "mxbai-embed-large": 1024,
    "nomic-embed-text": 768,
    "all-minilm": 384,
    "snowflake-arctic-embed": 1024,
    "bge-m3": 1024,
    "text-embedding-ada-002": 1536,
}


def embedding_dimension_for_model(model_name: str | None) -> int:
    """Return the expected embedding dimensionality for a given model string."""

    if not model_name:
        return DEFAULT_EMBEDDING_DIMENSION
    key = model_name.lower()
    if key in MODEL_DIMENSIONS:
        return MODEL_DIMENSIONS[key]
    # Ollama tags such as "mxbai-embed-large:latest" share the base dimension.
    for candidate, dimension in MODEL_DIMENSIONS.items():
        if key.startswith(candidate):
            return dimension
    return DEFAULT_EMBEDDING_DIMENSION


def resolve_embedding_dimension(settings: EmbeddingSettings) -> int:
    """Explicit configuration wins over the model lookup."""

    if settings.dimension:
        return settings.dimension
    return embedding_dimension_for_model(settings.model)


__all__ = [
    "DEFAULT_EMBEDDING_DIMENSION",
    "MODEL_DIMENSIONS",
    "embedding_dimension_for_model",
    "resolve_embedding_dimension",
]
