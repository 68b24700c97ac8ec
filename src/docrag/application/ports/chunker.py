"""Chunker port - text splitting strategies."""

from typing import Protocol

from docrag.application.dto.chunking_config import ChunkingConfig
from docrag.domain.entities import Chunk, SourceDocument


class Chunker(Protocol):
    """Port for splitting text into offset-tracked chunks."""

    def chunk(
        self,
        text: str,
        config: ChunkingConfig,
        document: SourceDocument | None = None,
    ) -> list[Chunk]: ...
