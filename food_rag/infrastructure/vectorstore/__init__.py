"""Vector store client exports."""

from .base import QueryMatch, VectorStore
from .chroma import ChromaVectorStore
from .factory import create_vector_store, select_backend
from .memory import InMemoryVectorStore
from .retry import RetryOutcome, RetryPolicy, run_with_retry
from .similarity import cosine_distance, cosine_similarity
from .upstash import UpstashVectorStore

__all__ = [
    "QueryMatch",
    "VectorStore",
    "ChromaVectorStore",
    "InMemoryVectorStore",
    "UpstashVectorStore",
    "RetryOutcome",
    "RetryPolicy",
    "run_with_retry",
    "cosine_distance",
    "cosine_similarity",
    "create_vector_store",
    "select_backend",
]
