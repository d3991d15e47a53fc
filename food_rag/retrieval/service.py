"""Retrieval augmented answering over the food vector store."""
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Sequence
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from ..infrastructure.embeddings.base import EmbeddingClient
from ..infrastructure.llm.base import LLMClient
from ..infrastructure.vectorstore.base import QueryMatch, VectorStore
from .constants import NO_CONTEXT_MESSAGE, SNIPPET_MAX_LENGTH
from .exceptions import RetrievalError
from .stream import StreamEvent

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ContextSnippet:
    """A ranked match labelled for citation in the prompt."""

    label: str
    id: str
    text: str
    distance: float

    @property
    def score(self) -> float:
        return 1.0 - self.distance

    def llm_block(self) -> str:
        return f"{self.label} {self.text}".strip()

    def context_payload(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "id": self.id,
            "snippet": _build_snippet(self.text),
            "distance": self.distance,
            "score": self.score,
        }

    def citation_payload(self) -> dict[str, Any]:
        return {"label": self.label, "id": self.id, "score": self.score}


def _build_snippet(content: str) -> str:
    snippet = content.strip()
    if len(snippet) <= SNIPPET_MAX_LENGTH:
        return snippet
    return snippet[:SNIPPET_MAX_LENGTH].rstrip() + "…"


def _label_matches(matches: Sequence[QueryMatch]) -> list[ContextSnippet]:
    return [
        ContextSnippet(label=f"[{index}]", id=match.id, text=match.text, distance=match.distance)
        for index, match in enumerate(matches, start=1)
    ]


class RAGService:
    """Embed a question, rank stored foods and stream an LLM answer."""

    def __init__(
        self,
        vector_store: VectorStore,
        embedder: EmbeddingClient,
        llm: LLMClient,
        *,
        default_results: int = 3,
        max_results: int = 20,
    ) -> None:
        self.vector_store = vector_store
        self.embedder = embedder
        self.llm = llm
        self.default_results = default_results
        self.max_results = max_results

    def _resolve_k(self, k: int | None) -> int:
        if k is None:
            return self.default_results
        return max(1, min(k, self.max_results))

    async def search(self, question: str, k: int | None = None) -> list[QueryMatch]:
        """Return the stored foods closest to ``question``."""

        results = self._resolve_k(k)
        start = perf_counter()
        vectors = await self.embedder.embed([question])
        if not vectors:
            raise RetrievalError("Embedding provider returned no vector for the question")
        matches = await self.vector_store.query(vectors[0], results)
        LOGGER.info(
            "Vector search finished | backend=%s k=%d results=%d duration=%.3fs",
            self.vector_store.name,
            results,
            len(matches),
            perf_counter() - start,
        )
        return matches

    async def answer(self, question: str, k: int | None = None) -> AsyncGenerator[bytes, None]:
        """Return an NDJSON stream answering ``question``.

        A failure ends only this stream, with an ``error`` event.
        """

        async def _stream() -> AsyncGenerator[bytes, None]:
            start = perf_counter()
            try:
                async for event in self._run(question, k):
                    yield event.encode()
            except Exception as exc:  # noqa: BLE001
                message = str(exc) or "Failed to answer the question."
                LOGGER.exception("Failed to answer question %r", question)
                yield StreamEvent.status(stage="error", message=message).encode()
                yield StreamEvent.error(message=message).encode()
            finally:
                LOGGER.info("Answer stream finished | duration=%.2fs", perf_counter() - start)

        return _stream()

    async def _run(self, question: str, k: int | None) -> AsyncGenerator[StreamEvent, None]:
        yield StreamEvent.status(stage="retrieving", message="Searching the food database…")
        snippets = _label_matches(await self.search(question, k))
        if snippets:
            yield StreamEvent.status(
                stage="retrieved",
                message=f"Found {len(snippets)} relevant food{'s' if len(snippets) != 1 else ''}.",
            )
        else:
            yield StreamEvent.status(stage="retrieved", message=NO_CONTEXT_MESSAGE)
        yield StreamEvent.context(snippets=[snippet.context_payload() for snippet in snippets])

        yield StreamEvent.status(stage="generating", message="Generating answer…")
        llm_context = [snippet.llm_block() for snippet in snippets] or None
        pieces: list[str] = []
        async for piece in self.llm.generate(question, context=llm_context):
            if piece:
                pieces.append(piece)
                yield StreamEvent.token(text=piece)

        if snippets:
            yield StreamEvent.citations(citations=[snippet.citation_payload() for snippet in snippets])
        yield StreamEvent.status(stage="complete", message="Answer ready.")
        yield StreamEvent.done(answer="".join(pieces).strip())


__all__ = ["ContextSnippet", "RAGService"]
