"""Embedding vector type and validation outcome."""

from collections.abc import Sequence
from dataclasses import dataclass

Vector = list[float]
VectorLike = Sequence[float]


@dataclass(frozen=True)
class VectorValidation:
    """Outcome of validating a vector."""

    valid: bool
    reason: str | None = None
