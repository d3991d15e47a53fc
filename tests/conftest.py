from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator, Sequence
import json
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi import FastAPI

from food_rag.config import (
    EmbeddingSettings,
    FastAPISettings,
    LoggingSettings,
    RAGSettings,
    Settings,
    VectorStoreSettings,
)
from food_rag.dependencies import get_embedding_client, get_llm_client
from food_rag.infrastructure.embeddings.base import EmbeddingClient
from food_rag.infrastructure.llm.base import LLMClient

KEYWORDS = ("japan", "fruit", "spicy")

SAMPLE_FOODS = [
    {"id": "1", "text": "Sushi is a rice dish from Japan.", "region": "Japan", "type": "Dish"},
    {"id": "2", "text": "Apples are a crunchy fruit.", "region": "Worldwide", "type": "Fruit"},
    {"id": "3", "text": "Kimchi is a spicy fermented cabbage.", "region": "Korea", "type": "Side dish"},
]


class KeywordEmbedder(EmbeddingClient):
    """One axis per keyword plus a constant bias axis."""

    model_name = "keyword-embedder"
    dimension = len(KEYWORDS) + 1

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            lowered = text.lower()
            vectors.append([1.0 if word in lowered else 0.0 for word in KEYWORDS] + [0.1])
        return vectors


class FakeLLM(LLMClient):
    """Stream canned pieces and record the context it was given."""

    model_name = "fake-llm"

    def __init__(self, pieces: Sequence[str] = ("Sushi ", "is from Japan [1]."), fail: bool = False) -> None:
        self.pieces = list(pieces)
        self.fail = fail
        self.calls: list[tuple[str, list[str]]] = []

    async def generate(self, prompt: str, *, context: Sequence[str] | None = None) -> AsyncGenerator[str, None]:
        self.calls.append((prompt, list(context or [])))
        if self.fail:
            raise RuntimeError("LLM unavailable")
        for piece in self.pieces:
            yield piece


@pytest.fixture
def dataset_path(tmp_path: Path) -> Path:
    path = tmp_path / "foods.json"
    path.write_text(json.dumps(SAMPLE_FOODS), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, dataset_path: Path) -> Settings:
    return Settings(
        environment="test",
        fastapi=FastAPISettings(enable_console=False),
        vector_store=VectorStoreSettings(
            backend="memory",
            snapshot_path=tmp_path / "simple_vector_db.json",
            retry_base_delay=0.0,
        ),
        embeddings=EmbeddingSettings(provider="local", dimension=KeywordEmbedder.dimension),
        rag=RAGSettings(dataset_path=dataset_path),
        logging=LoggingSettings(directory=tmp_path / "logs"),
    )


@pytest.fixture
def embedder() -> KeywordEmbedder:
    return KeywordEmbedder()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def failing_llm() -> FakeLLM:
    return FakeLLM(fail=True)


@pytest.fixture
def app(settings: Settings, embedder: KeywordEmbedder, fake_llm: FakeLLM) -> Iterator[FastAPI]:
    """Provide an app backed by the in-memory store and fake model clients."""

    from food_rag.main import create_app

    app = create_app(settings)
    app.dependency_overrides[get_embedding_client] = lambda: embedder
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    try:
        yield app
    finally:
        app.dependency_overrides.clear()
