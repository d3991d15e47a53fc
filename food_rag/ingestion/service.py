"""Ingestion of the food dataset into the configured vector store."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

from ..infrastructure.embeddings.base import EmbeddingClient
from ..infrastructure.vectorstore.base import VectorStore
from .dataset import load_food_items

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestionSummary:
    total: int
    added: int
    skipped: int


class IngestionService:
    """Embed dataset entries and write them to the vector store."""

    def __init__(self, vector_store: VectorStore, embedder: EmbeddingClient, dataset_path: Path) -> None:
        self.vector_store = vector_store
        self.embedder = embedder
        self.dataset_path = dataset_path

    async def ingest(self, *, force: bool = False) -> IngestionSummary:
        """Load the dataset and add every entry the store does not hold yet.

        With ``force`` all entries are re-embedded and replace the stored ones.
        """

        start = perf_counter()
        items = load_food_items(self.dataset_path)
        existing = set() if force else set(await self.vector_store.get_existing_ids())
        pending = [item for item in items if item.id not in existing]
        LOGGER.info(
            "Ingestion started | dataset=%s items=%d pending=%d force=%s",
            self.dataset_path,
            len(items),
            len(pending),
            force,
        )
        if pending:
            texts = [item.document_text() for item in pending]
            vectors = await self.embedder.embed(texts)
            await self.vector_store.add_documents(texts, vectors, [item.id for item in pending])
        summary = IngestionSummary(total=len(items), added=len(pending), skipped=len(items) - len(pending))
        LOGGER.info(
            "Ingestion finished | added=%d skipped=%d duration=%.3fs",
            summary.added,
            summary.skipped,
            perf_counter() - start,
        )
        return summary

    async def existing_ids(self) -> list[str]:
        return await self.vector_store.get_existing_ids()

    async def delete(self, ids: list[str]) -> None:
        await self.vector_store.delete_documents(ids)

    async def reset(self) -> None:
        LOGGER.info("Resetting vector store | backend=%s", self.vector_store.name)
        await self.vector_store.reset()


__all__ = ["IngestionService", "IngestionSummary"]
