"""Shared exception hierarchy for the food-rag services."""
from __future__ import annotations

from typing import Optional


class PlatformError(Exception):
    """Base exception for domain specific failures."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigurationError(PlatformError):
    """Raised when settings cannot be validated at start-up."""


class VectorStoreError(PlatformError):
    """Raised when a vector store backend fails."""


class DimensionMismatchError(VectorStoreError):
    """Raised when two vectors that must be compared differ in length."""


class InitializationFailedError(VectorStoreError):
    """Raised when a backend cannot reach a usable ready state."""


class OperationFailedError(VectorStoreError):
    """Raised when a network operation exhausted its retry budget."""


class ServiceError(PlatformError):
    """Raised when a service level operation fails."""


__all__ = [
    "PlatformError",
    "ConfigurationError",
    "VectorStoreError",
    "DimensionMismatchError",
    "InitializationFailedError",
    "OperationFailedError",
    "ServiceError",
]
