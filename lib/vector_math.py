# =============================================================================
# lib/vector_math.py - Vector Helpers for Taste Similarity
# =============================================================================
# Small numpy helpers over embedding vectors. Inputs and outputs are plain
# lists of floats so they serialize straight into JSON / pgvector columns.
# =============================================================================

from __future__ import annotations

from typing import Sequence

import numpy as np

Vector = Sequence[float]


def normalize(vector: Vector) -> list[float]:
    """Scale to unit length; the zero vector is returned unchanged."""
    arr = np.asarray(vector, dtype=float)
    length = np.linalg.norm(arr)
    if length == 0:
        return arr.tolist()
    return (arr / length).tolist()


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Cosine similarity; 0.0 for empty, mismatched or zero-length vectors."""
    if len(a) != len(b) or len(a) == 0:
        return 0.0
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0:
        return 0.0
    return float(np.dot(va, vb) / denom)


def average_vectors(vectors: Sequence[Vector]) -> list[float] | None:
    """
    Element-wise mean.

    Vectors whose dimension differs from the first are skipped, but the
    divisor is still the total number of vectors.
    """
    if len(vectors) == 0:
        return None
    dim = len(vectors[0])
    total = np.zeros(dim, dtype=float)
    for vector in vectors:
        if len(vector) != dim:
            continue
        total += np.asarray(vector, dtype=float)
    return (total / len(vectors)).tolist()


def weighted_average(a: Vector, b: Vector, weight_a: float) -> list[float] | None:
    """weight_a * a + (1 - weight_a) * b; None for empty or mismatched vectors."""
    if len(a) != len(b) or len(a) == 0:
        return None
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    return (weight_a * va + (1 - weight_a) * vb).tolist()
