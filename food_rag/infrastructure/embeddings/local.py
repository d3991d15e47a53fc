"""Deterministic local embeddings for development and tests.

Words are hashed into signed buckets (feature hashing), so texts sharing
vocabulary end up close in cosine space without any model download.
"""
from __future__ import annotations

import asyncio
import hashlib
import math
import re
from collections.abc import Sequence

from .base import EmbeddingClient
from .constants import DEFAULT_EMBEDDING_DIMENSION

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


class LocalEmbeddingClient(EmbeddingClient):
    """Hash word tokens into a fixed-size, L2-normalised vector."""

    def __init__(self, *, dimension: int = DEFAULT_EMBEDDING_DIMENSION) -> None:
        self.dimension = dimension
        self.model_name = "local-hashing-embedding"

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._embed_sync, list(texts))

    def _embed_sync(self, texts: Sequence[str]) -> list[list[float]]:
        return [self._embed_single(text) for text in texts]

    def _embed_single(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in _TOKEN_PATTERN.findall(text.lower()):
            digest = hashlib.sha256(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "big") % self.dimension
            sign = 1.0 if digest[4] & 1 else -1.0
            vector[bucket] += sign
        norm = math.sqrt(sum(value * value for value in vector))
        if norm == 0:
            return vector
        return [value / norm for value in vector]


__all__ = ["LocalEmbeddingClient"]
