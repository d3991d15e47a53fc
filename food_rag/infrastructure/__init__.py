"""Infrastructure package exports."""

from . import embeddings, llm, vectorstore

__all__ = ["embeddings", "llm", "vectorstore"]
