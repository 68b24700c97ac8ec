"""Embedding provider port - text to fixed-length vectors."""

from typing import Protocol

from docrag.domain.value_objects import Vector


class EmbeddingProvider(Protocol):
    """Port for generating text embeddings.

    ``embed_batch`` preserves input order and returns one vector per
    text; a failure of any item fails the whole call. ``dimensions``
    is None when the model does not declare one up front.
    """

    @property
    def dimensions(self) -> int | None: ...

    async def embed(self, text: str) -> Vector: ...

    async def embed_batch(self, texts: list[str]) -> list[Vector]: ...
