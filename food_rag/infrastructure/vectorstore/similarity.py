"""Cosine similarity helpers shared by the in-process ranking."""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ...exceptions import DimensionMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return ``dot(a, b) / (|a| * |b|)``.

    Zero-norm inputs score exactly ``0.0``.
    """

    left = np.asarray(a, dtype=float)
    right = np.asarray(b, dtype=float)
    if left.shape != right.shape:
        raise DimensionMismatchError(f"Vectors must have the same length ({len(left)} != {len(right)})")

    norm_left = np.linalg.norm(left)
    norm_right = np.linalg.norm(right)
    if norm_left == 0 or norm_right == 0:
        return 0.0
    return float(np.dot(left, right) / (norm_left * norm_right))


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return 1.0 - cosine_similarity(a, b)


__all__ = ["cosine_similarity", "cosine_distance"]
