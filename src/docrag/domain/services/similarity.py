"""Vector similarity scoring.

Cosine similarity plus the integrity checks every embedding passes
before it is compared: non-empty sequence, finite numbers, and an
optional expected dimension.
"""

import math
from collections.abc import Sequence
from numbers import Real

import numpy as np

from docrag.domain.exceptions import DimensionMismatchError, InvalidEmbeddingError
from docrag.domain.value_objects import Vector, VectorLike, VectorValidation


def validate(vector: object, expected_dim: int | None = None) -> VectorValidation:
    """Check that ``vector`` is a usable embedding. Never raises."""
    if isinstance(vector, np.ndarray):
        if vector.ndim != 1:
            return VectorValidation(False, "Embedding must be one-dimensional")
        values: Sequence[object] = vector.tolist()
    elif isinstance(vector, Sequence) and not isinstance(vector, (str, bytes)):
        values = vector
    else:
        return VectorValidation(False, "Embedding must be a sequence of numbers")

    if len(values) == 0:
        return VectorValidation(False, "Embedding cannot be empty")

    if expected_dim is not None and len(values) != expected_dim:
        return VectorValidation(
            False, f"Expected {expected_dim} dimensions, got {len(values)}"
        )

    for value in values:
        if isinstance(value, bool) or not isinstance(value, Real):
            return VectorValidation(False, "Embedding contains non-numeric values")
        if not math.isfinite(value):
            return VectorValidation(False, "Embedding contains non-finite values")

    return VectorValidation(True)


def ensure_valid(vector: object, expected_dim: int | None = None) -> None:
    """Raise when ``vector`` is not a usable embedding."""
    result = validate(vector)
    if not result.valid:
        raise InvalidEmbeddingError(result.reason)
    if expected_dim is not None and len(vector) != expected_dim:  # type: ignore[arg-type]
        raise DimensionMismatchError(expected_dim, len(vector))  # type: ignore[arg-type]


def _as_array(vector: VectorLike) -> np.ndarray:
    ensure_valid(vector)
    return np.asarray(vector, dtype=np.float64)


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """Cosine of the angle between ``a`` and ``b``, in [-1, 1].

    Raises DimensionMismatchError when lengths differ. A zero-norm
    vector scores 0.0.
    """
    left = _as_array(a)
    right = _as_array(b)
    if left.shape != right.shape:
        raise DimensionMismatchError(left.shape[0], right.shape[0])
    return _cosine(left, right)


def cosine_scores(query: VectorLike, vectors: Sequence[VectorLike]) -> list[float]:
    """Score each of ``vectors`` against ``query`` without re-validating.

    Callers must have passed every vector through ``ensure_valid`` with a
    common dimension.
    """
    left = np.asarray(query, dtype=np.float64)
    return [_cosine(left, np.asarray(v, dtype=np.float64)) for v in vectors]


def _cosine(left: np.ndarray, right: np.ndarray) -> float:
    # cosine is scale invariant; rescaling keeps the norms from overflowing
    peak_left = np.max(np.abs(left))
    peak_right = np.max(np.abs(right))
    if peak_left == 0 or peak_right == 0:
        return 0.0
    left = left / peak_left
    right = right / peak_right

    norm_left = np.linalg.norm(left)
    norm_right = np.linalg.norm(right)

    score = float(np.dot(left, right) / (norm_left * norm_right))
    return max(-1.0, min(1.0, score))


def normalize(vector: VectorLike) -> Vector:
    """Unit-length copy of ``vector``; a zero vector is returned unchanged."""
    array = _as_array(vector)
    norm = np.linalg.norm(array)
    if norm == 0:
        return list(vector)
    return (array / norm).tolist()
