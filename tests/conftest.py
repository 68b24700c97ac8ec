"""Pytest fixtures for docrag tests."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from docrag.application.dto.chunking_config import ChunkingConfig
from docrag.application.dto.retrieval_config import RetrievalConfig
from docrag.domain.entities import Chunk
from docrag.domain.value_objects import ChunkingStrategy


# --- Fake embedding provider ---


class FakeEmbeddingProvider:
    """In-memory embedding provider with fixed vectors per text.

    Unknown texts get ``default``. Records every call so tests can
    assert on batching and concurrency.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        dimensions: int | None = None,
        delay: float = 0.0,
        fail_with: Exception | None = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default if default is not None else [0.0, 0.0]
        self._dimensions = dimensions
        self.delay = delay
        self.fail_with = fail_with
        self.embed_calls: list[str] = []
        self.batch_calls: list[list[str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def dimensions(self) -> int | None:
        return self._dimensions

    async def _enter(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        if self.fail_with is not None:
            raise self.fail_with

    async def embed(self, text: str) -> list[float]:
        self.embed_calls.append(text)
        await self._enter()
        return list(self.vectors.get(text, self.default))

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        self.batch_calls.append(list(texts))
        await self._enter()
        return [list(self.vectors.get(t, self.default)) for t in texts]


def make_chunk(content: str, index: int = 0, title: str = "Untitled", doc_id: str | None = None) -> Chunk:
    """Chunk covering its own content as if it were a whole document."""
    return Chunk(
        content=content,
        chunk_index=index,
        start_offset=0,
        end_offset=max(len(content), 1),
        document_id=doc_id,
        document_title=title,
    )


# --- Fixtures ---


@pytest.fixture
def fake_embedding_provider() -> FakeEmbeddingProvider:
    """Fresh fake provider with no vectors registered."""
    return FakeEmbeddingProvider()


@pytest.fixture
def mock_embedding_provider():
    """AsyncMock for EmbeddingProvider - returns fixed vectors per text."""

    async def _embed(text: str) -> list[float]:
        return [0.1] * 8

    async def _embed_batch(texts: list[str]) -> list[list[float]]:
        return [[0.1] * 8 for _ in texts]

    mock = AsyncMock()
    mock.dimensions = 8
    mock.embed = AsyncMock(side_effect=_embed)
    mock.embed_batch = AsyncMock(side_effect=_embed_batch)
    return mock


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Default sentence chunking config for chunker tests."""
    return ChunkingConfig(chunk_size=100, strategy=ChunkingStrategy.SENTENCE)


@pytest.fixture
def retrieval_config() -> RetrievalConfig:
    """Config from the two-dimensional ranking example."""
    return RetrievalConfig(top_k=2, similarity_threshold=0.5)
