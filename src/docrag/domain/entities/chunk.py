"""Chunk entities - document text spans and their scores."""

from dataclasses import dataclass, field
from typing import Any

from docrag.domain.exceptions import ValidationError
from docrag.domain.value_objects import Vector


@dataclass(frozen=True)
class Chunk:
    """Contiguous span of a document's text with its position."""

    content: str
    chunk_index: int
    start_offset: int
    end_offset: int
    document_id: str | None = None
    document_title: str = "Untitled"
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.chunk_index < 0:
            raise ValidationError(f"chunk_index must be non-negative, got {self.chunk_index}")
        if not 0 <= self.start_offset < self.end_offset:
            raise ValidationError(
                f"Invalid chunk span [{self.start_offset}, {self.end_offset})"
            )


@dataclass(frozen=True)
class ScoredChunk:
    """Chunk with its cosine similarity to the query."""

    chunk: Chunk
    similarity: float
    embedding: Vector
