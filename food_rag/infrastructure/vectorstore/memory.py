"""In-process vector store with linear-scan cosine ranking.

Intended for local development. The corpus lives in memory and is mirrored to
a JSON snapshot after every mutation. Concurrent writers are not serialised:
the last snapshot write wins.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ...exceptions import InitializationFailedError
from .base import QueryMatch, VectorStore
from .similarity import cosine_similarity

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DocumentRecord:
    id: str
    text: str
    embedding: list[float]

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "embedding": self.embedding}


class InMemoryVectorStore(VectorStore):
    """Exact cosine search over every stored vector."""

    def __init__(self, snapshot_path: Path | None = None) -> None:
        self.snapshot_path = snapshot_path
        self._documents: dict[str, DocumentRecord] = {}

    @property
    def name(self) -> str:
        return "memory"

    async def initialize(self) -> None:
        if self.snapshot_path is None or not self.snapshot_path.exists():
            LOGGER.info("In-memory vector store initialised (empty)")
            return
        try:
            payload = json.loads(self.snapshot_path.read_text(encoding="utf-8"))
            documents = payload.get("documents") or []
            loaded = {
                str(item["id"]): DocumentRecord(
                    id=str(item["id"]),
                    text=str(item["text"]),
                    embedding=[float(value) for value in item["embedding"]],
                )
                for item in documents
            }
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as exc:
            LOGGER.error("Failed to load vector snapshot %s: %s", self.snapshot_path, exc)
            raise InitializationFailedError(
                f"In-memory vector store initialisation failed: {exc}", cause=exc
            ) from exc
        self._documents = loaded
        LOGGER.info(
            "In-memory vector store initialised | documents=%d snapshot=%s",
            len(self._documents),
            self.snapshot_path,
        )

    async def add_documents(
        self,
        texts: Sequence[str],
        vectors: Sequence[Sequence[float]],
        ids: Sequence[str],
    ) -> None:
        for text, vector, doc_id in zip(texts, vectors, ids):
            # Drop first so a replaced record moves to the end of the corpus.
            self._documents.pop(doc_id, None)
            self._documents[doc_id] = DocumentRecord(id=doc_id, text=text, embedding=list(vector))
        self._save_snapshot()
        LOGGER.info("Added %d documents to in-memory vector store", len(ids))

    async def query(self, vector: Sequence[float], k: int) -> list[QueryMatch]:
        if not self._documents:
            return []
        scored = [
            (cosine_similarity(vector, record.embedding), record) for record in self._documents.values()
        ]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [
            QueryMatch(id=record.id, text=record.text, distance=1.0 - similarity)
            for similarity, record in scored[: max(k, 0)]
        ]

    async def get_existing_ids(self) -> list[str]:
        return list(self._documents)

    async def delete_documents(self, ids: Sequence[str]) -> None:
        removed = 0
        for doc_id in ids:
            if self._documents.pop(doc_id, None) is not None:
                removed += 1
        self._save_snapshot()
        LOGGER.info("Deleted %d documents from in-memory vector store", removed)

    async def reset(self) -> None:
        self._documents.clear()
        self._save_snapshot()
        LOGGER.info("In-memory vector store reset")

    def _save_snapshot(self) -> None:
        if self.snapshot_path is None:
            return
        self.snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        data = {"documents": [record.as_dict() for record in self._documents.values()]}
        self.snapshot_path.write_text(json.dumps(data, indent=2), encoding="utf-8")


__all__ = ["DocumentRecord", "InMemoryVectorStore"]
