"""Domain entities."""

from docrag.domain.entities.chunk import Chunk, ScoredChunk
from docrag.domain.entities.document import SourceDocument

__all__ = [
    "Chunk",
    "ScoredChunk",
    "SourceDocument",
]
