"""Chroma vector store tests against an in-process client double."""
from __future__ import annotations

import asyncio
from typing import Any

import pytest

from food_rag.exceptions import InitializationFailedError, OperationFailedError
from food_rag.infrastructure.vectorstore.retry import RetryPolicy
from food_rag.infrastructure.vectorstore.chroma import ChromaVectorStore
from food_rag.infrastructure.vectorstore.similarity import cosine_distance


class FakeCollection:
    def __init__(self, name: str, metadata: dict[str, Any] | None) -> None:
        self.name = name
        self.metadata = metadata
        self.records: dict[str, tuple[list[float], str]] = {}
        self.query_failures = 0

    def count(self) -> int:
        return len(self.records)

    def upsert(self, *, ids: list[str], embeddings: list[list[float]], documents: list[str]) -> None:
        for doc_id, embedding, document in zip(ids, embeddings, documents):
            self.records[doc_id] = (embedding, document)

    def query(self, *, query_embeddings: list[list[float]], n_results: int, include: list[str]) -> dict[str, Any]:
        if self.query_failures:
            self.query_failures -= 1
            raise ConnectionError("server restarting")
        vector = query_embeddings[0]
        ranked = sorted(self.records.items(), key=lambda item: cosine_distance(vector, item[1][0]))[:n_results]
        return {
            "ids": [[doc_id for doc_id, _ in ranked]],
            "documents": [[document for _, (_, document) in ranked]],
            "distances": [[cosine_distance(vector, embedding) for _, (embedding, _) in ranked]],
        }

    def get(self, *, include: list[str]) -> dict[str, Any]:
        return {"ids": list(self.records)}

    def delete(self, *, ids: list[str]) -> None:
        for doc_id in ids:
            self.records.pop(doc_id, None)


class FakeClient:
    def __init__(self, healthy: bool = True) -> None:
        self.healthy = healthy
        self.collections: dict[str, FakeCollection] = {}
        self.deleted: list[str] = []
        self.create_failures = 0

    def heartbeat(self) -> int:
        if not self.healthy:
            raise ConnectionError("connection refused")
        return 1

    def list_collections(self) -> list[FakeCollection]:
        return list(self.collections.values())

    def get_or_create_collection(self, *, name: str, metadata: dict[str, Any] | None = None) -> FakeCollection:
        if self.create_failures:
            self.create_failures -= 1
            raise ConnectionError("server restarting")
        if name not in self.collections:
            self.collections[name] = FakeCollection(name, metadata)
        return self.collections[name]

    def delete_collection(self, *, name: str) -> None:
        if name not in self.collections:
            raise ValueError(f"Collection {name} does not exist.")
        self.deleted.append(name)
        del self.collections[name]


def _store(client: FakeClient, attempts: int = 3) -> ChromaVectorStore:
    return ChromaVectorStore(
        host="localhost",
        port=8000,
        collection_name="foods",
        retry_policy=RetryPolicy(attempts=attempts, base_delay=0.0),
        client_factory=lambda host, port: client,
    )


def test_initialize_creates_cosine_collection() -> None:
    client = FakeClient()

    async def _run() -> None:
        await _store(client).initialize()

    asyncio.run(_run())
    assert client.collections["foods"].metadata == {"hnsw:space": "cosine"}


def test_initialize_fails_when_server_unreachable() -> None:
    async def _run() -> None:
        with pytest.raises(InitializationFailedError) as excinfo:
            await _store(FakeClient(healthy=False)).initialize()
        assert isinstance(excinfo.value.cause, ConnectionError)

    asyncio.run(_run())


def test_add_query_and_replace() -> None:
    client = FakeClient()

    async def _run() -> None:
        store = _store(client)
        await store.initialize()
        assert await store.query([1.0, 0.0], 3) == []

        await store.add_documents(["apple", "sushi"], [[1.0, 0.0], [0.0, 1.0]], ["1", "2"])
        await store.add_documents(["banana"], [[1.0, 0.1]], ["1"])

        matches = await store.query([1.0, 0.0], 5)
        assert [match.id for match in matches] == ["1", "2"]
        assert matches[0].text == "banana"
        assert matches[1].distance == pytest.approx(1.0)
        assert sorted(await store.get_existing_ids()) == ["1", "2"]
        assert await store.query([1.0, 0.0], 0) == []

    asyncio.run(_run())


def test_query_retries_then_fails() -> None:
    client = FakeClient()

    async def _run() -> None:
        store = _store(client, attempts=2)
        await store.initialize()
        await store.add_documents(["apple"], [[1.0, 0.0]], ["1"])

        client.collections["foods"].query_failures = 1
        assert [match.id for match in await store.query([1.0, 0.0], 1)] == ["1"]

        client.collections["foods"].query_failures = 2
        with pytest.raises(OperationFailedError):
            await store.query([1.0, 0.0], 1)

    asyncio.run(_run())


def test_delete_and_reset() -> None:
    client = FakeClient()

    async def _run() -> None:
        store = _store(client)
        await store.initialize()
        await store.add_documents(["a", "b"], [[1.0, 0.0], [0.0, 1.0]], ["1", "2"])
        await store.delete_documents(["1"])
        assert await store.get_existing_ids() == ["2"]

        await store.reset()
        assert await store.get_existing_ids() == []

    asyncio.run(_run())
    assert client.deleted == ["foods"]


def test_reset_recovers_when_recreate_fails_once() -> None:
    client = FakeClient()

    async def _run() -> None:
        store = _store(client)
        await store.initialize()
        await store.add_documents(["a"], [[1.0, 0.0]], ["1"])

        client.create_failures = 1
        await store.reset()
        assert await store.get_existing_ids() == []

        await store.add_documents(["b"], [[0.0, 1.0]], ["2"])
        assert await store.get_existing_ids() == ["2"]

    asyncio.run(_run())
    # The second attempt finds the collection already gone and only recreates it.
    assert client.deleted == ["foods"]
    assert "foods" in client.collections
