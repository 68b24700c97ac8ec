"""Chunking configuration DTO."""

from dataclasses import dataclass

from docrag.domain.exceptions import ValidationError
from docrag.domain.value_objects import ChunkingStrategy


@dataclass(frozen=True)
class ChunkingConfig:
    """Configuration for text chunking."""

    chunk_size: int = 1000
    strategy: ChunkingStrategy = ChunkingStrategy.SENTENCE

    def __post_init__(self) -> None:
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise ValidationError("chunk_size must be an integer")
        if self.chunk_size <= 0:
            raise ValidationError(f"chunk_size must be positive, got {self.chunk_size}")
        try:
            object.__setattr__(self, "strategy", ChunkingStrategy(self.strategy))
        except ValueError as e:
            raise ValidationError(f"Unsupported chunking strategy: {self.strategy}") from e
