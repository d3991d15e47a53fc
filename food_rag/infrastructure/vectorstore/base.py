"""Abstract interfaces for vector store access."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class QueryMatch:
    """A single ranked hit; lower distance means more relevant."""

    id: str
    text: str
    distance: float


class VectorStore(ABC):
    """Backend-agnostic vector store contract.

    Every backend keeps replace-by-id semantics on :meth:`add_documents` and
    returns query matches ordered by ascending distance.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier of the backend."""

    @abstractmethod
    async def initialize(self) -> None:
        """Bring the backend to a ready state or raise ``InitializationFailedError``."""

    @abstractmethod
    async def add_documents(
        self,
        texts: Sequence[str],
        vectors: Sequence[Sequence[float]],
        ids: Sequence[str],
    ) -> None:
        """Insert records, replacing any existing record with the same id."""

    @abstractmethod
    async def query(self, vector: Sequence[float], k: int) -> list[QueryMatch]:
        """Return at most ``k`` matches ordered by ascending distance."""

    @abstractmethod
    async def get_existing_ids(self) -> list[str]:
        """Return the ids currently stored, in no particular order."""

    @abstractmethod
    async def delete_documents(self, ids: Sequence[str]) -> None:
        """Remove the records with the given ids."""

    @abstractmethod
    async def reset(self) -> None:
        """Remove every record."""

    async def close(self) -> None:
        """Release held resources. Backends without any keep the no-op."""


__all__ = ["QueryMatch", "VectorStore"]
