"""Pure domain services."""

from docrag.domain.services.similarity import (
    cosine_scores,
    cosine_similarity,
    ensure_valid,
    normalize,
    validate,
)

__all__ = [
    "cosine_scores",
    "cosine_similarity",
    "ensure_valid",
    "normalize",
    "validate",
]
