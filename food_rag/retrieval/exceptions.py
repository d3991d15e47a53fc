"""Retrieval specific exceptions."""
from __future__ import annotations

from ..exceptions import ServiceError


class RetrievalError(ServiceError):
    """Base class for retrieval failures."""


__all__ = ["RetrievalError"]
