"""Vector similarity helpers for embedding comparisons."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def cosine_similarity(
    a: np.ndarray | Sequence[float] | None,
    b: np.ndarray | Sequence[float] | None,
) -> float:
    """Cosine similarity of two equal-length vectors.

    Returns 0.0 for a missing vector or mismatched lengths. A zero-norm vector
    produces a non-finite value; pass results through ``finite_or_zero``.
    """

    if a is None or b is None:
        return 0.0

    left = np.asarray(a, dtype=np.float64)
    right = np.asarray(b, dtype=np.float64)
    if left.ndim != 1 or right.ndim != 1 or left.shape[0] != right.shape[0]:
        return 0.0

    dot = float(np.dot(left, right))
    norms = float(np.linalg.norm(left)) * float(np.linalg.norm(right))
    if norms == 0.0:
        return math.nan if dot == 0.0 else math.copysign(math.inf, dot)
    return dot / norms


def finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def mean_vector(vectors: Sequence[np.ndarray | Sequence[float]]) -> np.ndarray | None:
    """Element-wise mean of the vectors sharing the first vector's dimension."""

    rows = [np.asarray(vector, dtype=np.float64) for vector in vectors if vector is not None]
    if not rows:
        return None

    dimension = rows[0].shape
    matching = [row for row in rows if row.shape == dimension]
    return np.mean(np.vstack(matching), axis=0)
