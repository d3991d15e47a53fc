"""Retrieval package exports."""

from .router import router
from .service import RAGService
from .stream import StreamEvent

__all__ = ["router", "RAGService", "StreamEvent"]
