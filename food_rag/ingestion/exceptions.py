"""Ingestion specific exceptions."""
from __future__ import annotations

from ..exceptions import ServiceError


class IngestionError(ServiceError):
    """Raised when ingestion fails."""


class DatasetNotFoundError(IngestionError):
    """Raised when the food dataset file cannot be located."""


__all__ = ["IngestionError", "DatasetNotFoundError"]
