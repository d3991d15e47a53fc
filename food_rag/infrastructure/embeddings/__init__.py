"""Embedding client exports."""

from .base import EmbeddingClient
from .clarifai import ClarifaiEmbeddingClient
from .constants import embedding_dimension_for_model, resolve_embedding_dimension
from .factory import create_embedding_client
from .local import LocalEmbeddingClient
from .ollama import OllamaEmbeddingClient

__all__ = [
    "EmbeddingClient",
    "ClarifaiEmbeddingClient",
    "create_embedding_client",
    "embedding_dimension_for_model",
    "resolve_embedding_dimension",
    "LocalEmbeddingClient",
    "OllamaEmbeddingClient",
]
