"""Embedding client abstractions."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ...exceptions import DimensionMismatchError


class EmbeddingClient(ABC):
    """Interface for text embedding providers."""

    model_name: str
    dimension: int

    @abstractmethod
    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Return embeddings for the provided texts."""

    def _validated(self, vector: Sequence[float]) -> list[float]:
        """Reject vectors that do not match the configured dimension."""

        values = [float(value) for value in vector]
        if len(values) != self.dimension:
            raise DimensionMismatchError(
                f"Embedding model '{self.model_name}' returned {len(values)} dimensions, "
                f"expected {self.dimension}"
            )
        return values


__all__ = ["EmbeddingClient"]
