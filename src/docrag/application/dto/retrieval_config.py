"""Retrieval configuration DTO."""

from dataclasses import dataclass, replace
from typing import Any

from docrag.application.dto.chunking_config import ChunkingConfig
from docrag.domain.exceptions import ValidationError
from docrag.domain.value_objects import ChunkingStrategy

DEFAULT_MAX_DOCUMENTS = 10


@dataclass(frozen=True)
class RetrievalConfig:
    """Per-call retrieval settings: selection, chunking and input cap."""

    top_k: int = 4
    similarity_threshold: float = 0.5
    chunk_size: int = 1000
    chunk_strategy: ChunkingStrategy = ChunkingStrategy.SENTENCE
    max_documents: int = DEFAULT_MAX_DOCUMENTS

    def __post_init__(self) -> None:
        for name in ("top_k", "chunk_size", "max_documents"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer")
            if value <= 0:
                raise ValidationError(f"{name} must be positive, got {value}")

        threshold = self.similarity_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ValidationError("similarity_threshold must be a number")
        if not -1.0 <= threshold <= 1.0:
            raise ValidationError(
                f"similarity_threshold must be between -1 and 1, got {threshold}"
            )
        object.__setattr__(self, "similarity_threshold", float(threshold))

        try:
            object.__setattr__(self, "chunk_strategy", ChunkingStrategy(self.chunk_strategy))
        except ValueError as e:
            raise ValidationError(
                f"Unsupported chunking strategy: {self.chunk_strategy}"
            ) from e

    @property
    def chunking(self) -> ChunkingConfig:
        """Chunking part of the configuration."""
        return ChunkingConfig(chunk_size=self.chunk_size, strategy=self.chunk_strategy)

    @classmethod
    def single_document(cls, **overrides: Any) -> "RetrievalConfig":
        """Preset used when chatting with one document."""
        return replace(cls(top_k=4, similarity_threshold=0.4, chunk_size=800), **overrides)

    @classmethod
    def multi_document(cls, **overrides: Any) -> "RetrievalConfig":
        """Preset used when searching across several documents."""
        return replace(cls(top_k=6, similarity_threshold=0.3, chunk_size=800), **overrides)
