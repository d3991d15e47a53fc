"""Backend selection for the vector store."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ...config import Settings
from ..embeddings.constants import resolve_embedding_dimension
from .base import VectorStore
from .chroma import ChromaVectorStore
from .memory import InMemoryVectorStore
from .retry import RetryPolicy
from .upstash import UpstashVectorStore

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class InMemoryBackend:
    snapshot_path: Path | None


@dataclass(frozen=True)
class LocalServerBackend:
    host: str
    port: int
    collection_name: str
    retry_policy: RetryPolicy


@dataclass(frozen=True)
class RemoteManagedBackend:
    url: str
    token: str
    collection_name: str
    dimension: int
    id_listing_limit: int
    retry_policy: RetryPolicy


BackendConfig = Union[InMemoryBackend, LocalServerBackend, RemoteManagedBackend]


def select_backend(settings: Settings) -> BackendConfig:
    """Pick the backend described by ``settings``.

    Selecting ``upstash`` without both URL and token degrades to the in-memory
    backend instead of building a client that cannot work.
    """

    store_settings = settings.vector_store
    backend = store_settings.backend
    if backend == "upstash":
        if store_settings.upstash_url and store_settings.upstash_token:
            return RemoteManagedBackend(
                url=store_settings.upstash_url,
                token=store_settings.upstash_token,
                collection_name=store_settings.collection_name,
                dimension=resolve_embedding_dimension(settings.embeddings),
                id_listing_limit=store_settings.upstash_id_listing_limit,
                retry_policy=RetryPolicy.from_settings(store_settings),
            )
        LOGGER.warning(
            "Upstash Vector selected but VECTOR_STORE__UPSTASH_URL/VECTOR_STORE__UPSTASH_TOKEN are missing; "
            "falling back to the in-memory vector store"
        )
        return InMemoryBackend(snapshot_path=store_settings.snapshot_path)
    if backend == "chroma":
        return LocalServerBackend(
            host=store_settings.chroma_host,
            port=store_settings.chroma_port,
            collection_name=store_settings.collection_name,
            retry_policy=RetryPolicy.from_settings(store_settings),
        )
    return InMemoryBackend(snapshot_path=store_settings.snapshot_path)


def build_vector_store(backend: BackendConfig) -> VectorStore:
    if isinstance(backend, RemoteManagedBackend):
        return UpstashVectorStore(
            url=backend.url,
            token=backend.token,
            collection_name=backend.collection_name,
            dimension=backend.dimension,
            retry_policy=backend.retry_policy,
            id_listing_limit=backend.id_listing_limit,
        )
    if isinstance(backend, LocalServerBackend):
        return ChromaVectorStore(
            host=backend.host,
            port=backend.port,
            collection_name=backend.collection_name,
            retry_policy=backend.retry_policy,
        )
    return InMemoryVectorStore(snapshot_path=backend.snapshot_path)


def create_vector_store(settings: Settings) -> VectorStore:
    """Create the vector store selected by runtime configuration."""

    backend = select_backend(settings)
    store = build_vector_store(backend)
    LOGGER.info("Vector store selected | backend=%s", store.name)
    return store


__all__ = [
    "BackendConfig",
    "InMemoryBackend",
    "LocalServerBackend",
    "RemoteManagedBackend",
    "select_backend",
    "build_vector_store",
    "create_vector_store",
]
