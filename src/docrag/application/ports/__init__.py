"""Application ports - what the retrieval core needs from adapters."""

from docrag.application.ports.chunker import Chunker
from docrag.application.ports.embedding_provider import EmbeddingProvider

__all__ = [
    "Chunker",
    "EmbeddingProvider",
]
