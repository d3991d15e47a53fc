"""In-memory vector store tests."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from food_rag.exceptions import DimensionMismatchError, InitializationFailedError
from food_rag.infrastructure.vectorstore.memory import InMemoryVectorStore


def test_query_on_empty_store_returns_nothing() -> None:
    async def _run() -> None:
        store = InMemoryVectorStore()
        await store.initialize()
        assert await store.query([1.0, 0.0], 5) == []

    asyncio.run(_run())


def test_query_ranks_by_cosine_similarity() -> None:
    async def _run() -> None:
        store = InMemoryVectorStore()
        await store.initialize()
        await store.add_documents(
            ["alpha", "beta", "gamma"],
            [[1.0, 0.0], [0.0, 1.0], [0.7, 0.7]],
            ["a", "b", "c"],
        )
        matches = await store.query([1.0, 0.1], 3)
        assert [match.id for match in matches] == ["a", "c", "b"]
        assert matches[0].text == "alpha"
        assert matches[0].distance < matches[1].distance < matches[2].distance

        top = await store.query([1.0, 0.1], 1)
        assert [match.id for match in top] == ["a"]
        assert await store.query([1.0, 0.1], 0) == []

    asyncio.run(_run())


def test_adding_existing_id_replaces_record() -> None:
    async def _run() -> None:
        store = InMemoryVectorStore()
        await store.initialize()
        await store.add_documents(["apple"], [[1.0, 0.0]], ["1"])
        await store.add_documents(["banana"], [[0.0, 1.0]], ["1"])

        assert await store.get_existing_ids() == ["1"]
        matches = await store.query([0.0, 1.0], 5)
        assert len(matches) == 1
        assert matches[0].text == "banana"
        assert matches[0].distance == pytest.approx(0.0)

    asyncio.run(_run())


def test_ties_keep_insertion_order() -> None:
    async def _run() -> None:
        store = InMemoryVectorStore()
        await store.initialize()
        await store.add_documents(["x", "y", "z"], [[1.0, 0.0], [1.0, 0.0], [1.0, 0.0]], ["x", "y", "z"])
        matches = await store.query([2.0, 0.0], 3)
        assert [match.id for match in matches] == ["x", "y", "z"]

    asyncio.run(_run())


def test_snapshot_is_reloaded(tmp_path: Path) -> None:
    snapshot = tmp_path / "db.json"

    async def _run() -> None:
        store = InMemoryVectorStore(snapshot_path=snapshot)
        await store.initialize()
        await store.add_documents(["sushi", "apples"], [[1.0, 0.0], [0.0, 1.0]], ["1", "2"])

        payload = json.loads(snapshot.read_text(encoding="utf-8"))
        assert [item["id"] for item in payload["documents"]] == ["1", "2"]
        assert payload["documents"][0] == {"id": "1", "text": "sushi", "embedding": [1.0, 0.0]}

        reloaded = InMemoryVectorStore(snapshot_path=snapshot)
        await reloaded.initialize()
        assert await reloaded.get_existing_ids() == ["1", "2"]
        matches = await reloaded.query([0.0, 1.0], 1)
        assert matches[0].text == "apples"

    asyncio.run(_run())


def test_missing_snapshot_starts_empty(tmp_path: Path) -> None:
    async def _run() -> None:
        store = InMemoryVectorStore(snapshot_path=tmp_path / "absent.json")
        await store.initialize()
        assert await store.get_existing_ids() == []

    asyncio.run(_run())


def test_corrupt_snapshot_fails_initialisation(tmp_path: Path) -> None:
    snapshot = tmp_path / "db.json"
    snapshot.write_text("{not json", encoding="utf-8")

    async def _run() -> None:
        store = InMemoryVectorStore(snapshot_path=snapshot)
        with pytest.raises(InitializationFailedError) as excinfo:
            await store.initialize()
        assert excinfo.value.cause is not None

    asyncio.run(_run())


def test_delete_and_reset_update_snapshot(tmp_path: Path) -> None:
    snapshot = tmp_path / "db.json"

    async def _run() -> None:
        store = InMemoryVectorStore(snapshot_path=snapshot)
        await store.initialize()
        await store.add_documents(["a", "b", "c"], [[1.0], [2.0], [3.0]], ["1", "2", "3"])

        await store.delete_documents(["2", "missing"])
        assert await store.get_existing_ids() == ["1", "3"]
        payload = json.loads(snapshot.read_text(encoding="utf-8"))
        assert [item["id"] for item in payload["documents"]] == ["1", "3"]

        await store.reset()
        assert await store.get_existing_ids() == []
        assert json.loads(snapshot.read_text(encoding="utf-8")) == {"documents": []}

    asyncio.run(_run())


def test_query_with_wrong_dimension_raises() -> None:
    async def _run() -> None:
        store = InMemoryVectorStore()
        await store.initialize()
        await store.add_documents(["a"], [[1.0, 0.0]], ["1"])
        with pytest.raises(DimensionMismatchError):
            await store.query([1.0, 0.0, 0.0], 1)

    asyncio.run(_run())
