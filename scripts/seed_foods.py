#!/usr/bin/env python
"""Embed the food dataset and write it to the configured vector store."""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from food_rag.config import load_settings
from food_rag.infrastructure.embeddings.factory import create_embedding_client
from food_rag.infrastructure.vectorstore.factory import create_vector_store
from food_rag.ingestion.service import IngestionService
from food_rag.logging import setup_logging


async def seed(*, force: bool, reset: bool, dataset: Path | None) -> None:
    """Initialise the store, optionally wipe it, then ingest the dataset."""

    settings = load_settings()
    setup_logging(settings)
    vector_store = create_vector_store(settings)
    await vector_store.initialize()
    try:
        service = IngestionService(
            vector_store,
            create_embedding_client(settings),
            dataset or settings.rag.dataset_path,
        )
        if reset:
            await service.reset()
        summary = await service.ingest(force=force)
    finally:
        await vector_store.close()

    print(
        f"Seeded {summary.added} of {summary.total} foods into '{vector_store.name}' "
        f"({summary.skipped} already present)."
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--force", action="store_true", help="re-embed foods that are already stored")
    parser.add_argument("--reset", action="store_true", help="remove every stored document first")
    parser.add_argument("--dataset", type=Path, default=None, help="alternative dataset JSON file")
    args = parser.parse_args()
    asyncio.run(seed(force=args.force, reset=args.reset, dataset=args.dataset))


if __name__ == "__main__":
    main()
