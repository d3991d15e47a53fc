"""Embedding client backed by the Ollama embeddings API."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from time import perf_counter

from ollama import AsyncClient

from .base import EmbeddingClient

LOGGER = logging.getLogger(__name__)


class OllamaEmbeddingClient(EmbeddingClient):
    """Generate embeddings via an Ollama server."""

    def __init__(
        self,
        *,
        host: str,
        model_name: str,
        request_timeout: int,
        dimension: int,
    ) -> None:
        self._host = host.rstrip("/")
        self.model_name = model_name
        self.dimension = dimension
        self._timeout = request_timeout
        self._client: AsyncClient | None = None

    def _ensure_client(self) -> AsyncClient:
        if self._client is None:
            self._client = AsyncClient(host=self._host, timeout=self._timeout)
        return self._client

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        client = self._ensure_client()
        start = perf_counter()
        try:
            response = await client.embed(model=self.model_name, input=list(texts))
        except Exception as exc:  # noqa: BLE001
            message = str(exc)
            if "context length" in message.lower():
                raise RuntimeError(
                    "Ollama embeddings rejected an input because it exceeds the model context window."
                ) from exc
            raise RuntimeError(f"Ollama embedding request to {self._host} failed: {exc}") from exc
        vectors = response["embeddings"]
        if not isinstance(vectors, Sequence) or len(vectors) != len(texts):
            raise RuntimeError("Unexpected response format from Ollama embeddings endpoint")
        LOGGER.debug(
            "Ollama embeddings | model=%s texts=%d duration=%.3fs",
            self.model_name,
            len(texts),
            perf_counter() - start,
        )
        return [self._validated(vector) for vector in vectors]


__all__ = ["OllamaEmbeddingClient"]
