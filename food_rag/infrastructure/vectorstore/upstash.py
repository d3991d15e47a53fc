"""Vector store backed by the managed Upstash Vector service."""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from time import perf_counter
from typing import Any

from upstash_vector import AsyncIndex, Vector

from ...exceptions import DimensionMismatchError, InitializationFailedError, VectorStoreError
from .base import QueryMatch, VectorStore
from .retry import RetryPolicy, run_with_retry

LOGGER = logging.getLogger(__name__)


def _create_index(url: str, token: str) -> AsyncIndex:
    # Client-side retries are disabled; RetryPolicy owns the attempt budget.
    return AsyncIndex(url=url, token=token, retries=0)


async def _close_index(index: Any) -> None:
    # AsyncIndex owns an httpx.AsyncClient but exposes no close method.
    client = getattr(index, "_client", None)
    aclose = getattr(client, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as exc:  # noqa: BLE001
        LOGGER.warning("Failed to close Upstash Vector HTTP client: %s", exc)


class UpstashVectorStore(VectorStore):
    """Upsert and query vectors in an Upstash index over HTTPS."""

    def __init__(
        self,
        *,
        url: str,
        token: str,
        collection_name: str,
        dimension: int,
        retry_policy: RetryPolicy | None = None,
        id_listing_limit: int = 100,
        index_factory: Callable[[str, str], Any] = _create_index,
    ) -> None:
        self._url = url
        self._token = token
        self.collection_name = collection_name
        self.dimension = dimension
        self.retry_policy = retry_policy or RetryPolicy()
        self.id_listing_limit = id_listing_limit
        self._index_factory = index_factory
        self._index: Any | None = None

    @property
    def name(self) -> str:
        return "upstash"

    async def initialize(self) -> None:
        if not self._url or not self._token:
            raise InitializationFailedError("Upstash Vector URL and token are required")
        index = None
        try:
            index = self._index_factory(self._url, self._token)
            info = await index.info()
        except Exception as exc:  # noqa: BLE001
            if index is not None:
                await _close_index(index)
            LOGGER.error("Failed to initialise Upstash Vector: %s", exc)
            raise InitializationFailedError(
                f"Failed to verify Upstash Vector connection: {exc}", cause=exc
            ) from exc
        remote_dimension = getattr(info, "dimension", None)
        if remote_dimension is not None and remote_dimension != self.dimension:
            await _close_index(index)
            raise InitializationFailedError(
                f"Upstash index dimension {remote_dimension} does not match the embedding dimension "
                f"{self.dimension}; configure EMBEDDINGS__DIMENSION or recreate the index"
            )
        self._index = index
        LOGGER.info(
            "Upstash Vector initialised | dimension=%s vectors=%s",
            remote_dimension,
            getattr(info, "vector_count", None),
        )

    def _require_index(self) -> Any:
        if self._index is None:
            raise VectorStoreError("Upstash Vector not initialised")
        return self._index

    def _check_dimension(self, vector: Sequence[float]) -> None:
        if len(vector) != self.dimension:
            raise DimensionMismatchError(
                f"Vector has {len(vector)} dimensions, Upstash index expects {self.dimension}"
            )

    async def add_documents(
        self,
        texts: Sequence[str],
        vectors: Sequence[Sequence[float]],
        ids: Sequence[str],
    ) -> None:
        index = self._require_index()
        timestamp = datetime.now(timezone.utc).isoformat()
        payload = []
        for text, vector, doc_id in zip(texts, vectors, ids):
            self._check_dimension(vector)
            payload.append(
                Vector(
                    id=doc_id,
                    vector=list(vector),
                    metadata={
                        "document": text,
                        "timestamp": timestamp,
                        "collection": self.collection_name,
                    },
                )
            )
        outcome = await run_with_retry(
            lambda: index.upsert(vectors=payload),
            self.retry_policy,
            description="upstash.upsert",
        )
        outcome.unwrap()
        LOGGER.info("Added %d documents to Upstash Vector | attempts=%d", len(payload), outcome.attempts)

    async def query(self, vector: Sequence[float], k: int) -> list[QueryMatch]:
        index = self._require_index()
        if k <= 0:
            return []
        self._check_dimension(vector)
        start = perf_counter()
        outcome = await run_with_retry(
            lambda: index.query(vector=list(vector), top_k=k, include_metadata=True),
            self.retry_policy,
            description="upstash.query",
        )
        results = outcome.unwrap() or []
        matches = []
        for result in results:
            metadata = result.metadata or {}
            score = result.score or 0.0
            matches.append(
                QueryMatch(
                    id=str(result.id),
                    text=str(metadata.get("document") or ""),
                    distance=1.0 - float(score),
                )
            )
        LOGGER.info(
            "Upstash query | k=%d results=%d duration=%.3fs",
            k,
            len(matches),
            perf_counter() - start,
        )
        return matches

    async def get_existing_ids(self) -> list[str]:
        """Best-effort id listing through a unit-vector query; failures yield ``[]``."""

        index = self._require_index()
        # Unit basis vector: a zero vector has no defined cosine score.
        unit = [1.0] + [0.0] * (self.dimension - 1)
        try:
            results = await index.query(vector=unit, top_k=self.id_listing_limit, include_metadata=False)
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Upstash Vector: failed to retrieve existing ids: %s", exc)
            return []
        return [str(result.id) for result in results or []]

    async def delete_documents(self, ids: Sequence[str]) -> None:
        index = self._require_index()
        if not ids:
            return
        outcome = await run_with_retry(
            lambda: index.delete(ids=list(ids)),
            self.retry_policy,
            description="upstash.delete",
        )
        outcome.unwrap()
        LOGGER.info("Deleted %d documents from Upstash Vector", len(ids))

    async def reset(self) -> None:
        index = self._require_index()
        outcome = await run_with_retry(index.reset, self.retry_policy, description="upstash.reset")
        outcome.unwrap()
        LOGGER.info("Upstash Vector index reset")

    async def close(self) -> None:
        index, self._index = self._index, None
        if index is not None:
            await _close_index(index)


__all__ = ["UpstashVectorStore"]
