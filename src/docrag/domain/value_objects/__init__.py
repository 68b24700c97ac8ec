"""Domain value objects."""

from docrag.domain.value_objects.chunking_strategy import ChunkingStrategy
from docrag.domain.value_objects.vector import Vector, VectorLike, VectorValidation

__all__ = [
    "ChunkingStrategy",
    "Vector",
    "VectorLike",
    "VectorValidation",
]
