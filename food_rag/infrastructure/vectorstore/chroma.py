"""Vector store backed by a locally running Chroma server."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from functools import partial
from typing import Any, TypeVar

import chromadb

from ...exceptions import InitializationFailedError, VectorStoreError
from .base import QueryMatch, VectorStore
from .retry import RetryPolicy, run_with_retry

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def _create_client(host: str, port: int) -> Any:
    return chromadb.HttpClient(host=host, port=port)


class ChromaVectorStore(VectorStore):
    """Store vectors in a Chroma collection using cosine distance."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        collection_name: str,
        retry_policy: RetryPolicy | None = None,
        client_factory: Callable[[str, int], Any] = _create_client,
    ) -> None:
        self.host = host
        self.port = port
        self.collection_name = collection_name
        self.retry_policy = retry_policy or RetryPolicy()
        self._client_factory = client_factory
        self._client: Any | None = None
        self._collection: Any | None = None

    @property
    def name(self) -> str:
        return "chroma"

    async def _run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def initialize(self) -> None:
        try:
            client = await self._run(self._client_factory, self.host, self.port)
            await self._run(client.heartbeat)
            collection = await self._run(self._get_or_create_collection, client)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Failed to initialise ChromaDB at %s:%s: %s", self.host, self.port, exc)
            raise InitializationFailedError(f"ChromaDB initialisation failed: {exc}", cause=exc) from exc
        self._client = client
        self._collection = collection
        LOGGER.info("ChromaDB initialised | collection=%s", self.collection_name)

    def _get_or_create_collection(self, client: Any) -> Any:
        return client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    def _require_collection(self) -> Any:
        if self._collection is None:
            raise VectorStoreError("ChromaDB not initialised")
        return self._collection

    async def add_documents(
        self,
        texts: Sequence[str],
        vectors: Sequence[Sequence[float]],
        ids: Sequence[str],
    ) -> None:
        collection = self._require_collection()
        outcome = await run_with_retry(
            lambda: self._run(
                collection.upsert,
                ids=list(ids),
                embeddings=[list(vector) for vector in vectors],
                documents=list(texts),
            ),
            self.retry_policy,
            description="chroma.upsert",
        )
        outcome.unwrap()
        LOGGER.info("Added %d documents to ChromaDB", len(ids))

    def _query_sync(self, collection: Any, vector: list[float], k: int) -> dict[str, Any]:
        if collection.count() == 0:
            return {}
        return collection.query(
            query_embeddings=[vector],
            n_results=k,
            include=["documents", "distances"],
        )

    async def query(self, vector: Sequence[float], k: int) -> list[QueryMatch]:
        collection = self._require_collection()
        if k <= 0:
            return []
        outcome = await run_with_retry(
            lambda: self._run(self._query_sync, collection, list(vector), k),
            self.retry_policy,
            description="chroma.query",
        )
        results = outcome.unwrap() or {}
        ids = (results.get("ids") or [[]])[0] or []
        documents = (results.get("documents") or [[]])[0] or []
        distances = (results.get("distances") or [[]])[0] or []
        matches: list[QueryMatch] = []
        for position, doc_id in enumerate(ids):
            if doc_id is None:
                continue
            text = documents[position] if position < len(documents) else None
            distance = distances[position] if position < len(distances) else None
            matches.append(
                QueryMatch(
                    id=str(doc_id),
                    text=text or "",
                    distance=float(distance) if distance is not None else 1.0,
                )
            )
        return matches

    async def get_existing_ids(self) -> list[str]:
        collection = self._require_collection()
        outcome = await run_with_retry(
            lambda: self._run(collection.get, include=[]),
            self.retry_policy,
            description="chroma.get",
        )
        results = outcome.unwrap() or {}
        return [str(doc_id) for doc_id in results.get("ids") or [] if doc_id is not None]

    async def delete_documents(self, ids: Sequence[str]) -> None:
        collection = self._require_collection()
        if not ids:
            return
        outcome = await run_with_retry(
            lambda: self._run(collection.delete, ids=list(ids)),
            self.retry_policy,
            description="chroma.delete",
        )
        outcome.unwrap()
        LOGGER.info("Deleted %d documents from ChromaDB", len(ids))

    def _reset_sync(self, client: Any) -> Any:
        # A retried attempt may follow one whose delete already succeeded.
        existing = {getattr(collection, "name", collection) for collection in client.list_collections()}
        if self.collection_name in existing:
            client.delete_collection(name=self.collection_name)
        return self._get_or_create_collection(client)

    async def reset(self) -> None:
        self._require_collection()
        client = self._client
        outcome = await run_with_retry(
            lambda: self._run(self._reset_sync, client),
            self.retry_policy,
            description="chroma.reset",
        )
        self._collection = outcome.unwrap()
        LOGGER.info("ChromaDB collection %s reset", self.collection_name)

    async def close(self) -> None:
        self._collection = None
        self._client = None


__all__ = ["ChromaVectorStore"]
