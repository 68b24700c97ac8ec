"""Unit tests for embedding adapters."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import openai
import pytest

from docrag.domain.exceptions import EmbeddingProviderError
from docrag.domain.services.similarity import cosine_similarity
from docrag.infrastructure.embedding.hashing_provider import HashingEmbeddingProvider
from docrag.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider


def _response(*vectors: list[float], order: list[int] | None = None) -> SimpleNamespace:
    indexes = order or list(range(len(vectors)))
    return SimpleNamespace(
        data=[SimpleNamespace(index=i, embedding=vectors[i]) for i in indexes]
    )


def _openai_provider(create: AsyncMock, dimensions: int | None = None) -> OpenAIEmbeddingProvider:
    client = MagicMock()
    client.embeddings.create = create
    return OpenAIEmbeddingProvider(
        base_url="http://localhost:9999/v1",
        api_key="test",
        model="text-embedding-3-small",
        dimensions=dimensions,
        client=client,
    )


# --- OpenAIEmbeddingProvider ---


@pytest.mark.asyncio
async def test_openai_embed_batch_preserves_input_order() -> None:
    """Vectors are matched to inputs by response index."""
    create = AsyncMock(return_value=_response([1.0, 0.0], [0.0, 1.0], order=[1, 0]))
    provider = _openai_provider(create)

    vectors = await provider.embed_batch(["first", "second"])

    assert vectors == [[1.0, 0.0], [0.0, 1.0]]
    create.assert_awaited_once_with(model="text-embedding-3-small", input=["first", "second"])


@pytest.mark.asyncio
async def test_openai_embed_cleans_text_and_passes_dimensions() -> None:
    create = AsyncMock(return_value=_response([0.5, 0.5]))
    provider = _openai_provider(create, dimensions=2)

    vector = await provider.embed("  what is\\nretrieval  ")

    assert vector == [0.5, 0.5]
    assert provider.dimensions == 2
    create.assert_awaited_once_with(
        model="text-embedding-3-small", input=["what is retrieval"], dimensions=2
    )


@pytest.mark.asyncio
async def test_openai_empty_batch_makes_no_request() -> None:
    create = AsyncMock()
    provider = _openai_provider(create)

    assert await provider.embed_batch([]) == []
    create.assert_not_awaited()


@pytest.mark.asyncio
async def test_openai_rejects_blank_text() -> None:
    create = AsyncMock()
    provider = _openai_provider(create)

    with pytest.raises(EmbeddingProviderError, match="Invalid text"):
        await provider.embed("   ")
    with pytest.raises(EmbeddingProviderError, match="empty"):
        await provider.embed_batch(["ok", " "])
    create.assert_not_awaited()


@pytest.mark.asyncio
async def test_openai_api_error_becomes_provider_error() -> None:
    create = AsyncMock(side_effect=openai.OpenAIError("rate limited"))
    provider = _openai_provider(create)

    with pytest.raises(EmbeddingProviderError, match="rate limited") as exc_info:
        await provider.embed_batch(["text"])
    assert isinstance(exc_info.value.__cause__, openai.OpenAIError)


@pytest.mark.asyncio
async def test_openai_short_response_fails_whole_batch() -> None:
    create = AsyncMock(return_value=_response([1.0, 0.0]))
    provider = _openai_provider(create)

    with pytest.raises(EmbeddingProviderError, match="1 vectors for 2 texts"):
        await provider.embed_batch(["a", "b"])


# --- HashingEmbeddingProvider ---


@pytest.mark.asyncio
async def test_hashing_provider_is_deterministic() -> None:
    provider = HashingEmbeddingProvider(dimensions=64)

    first = await provider.embed("Cosine similarity ranks chunks")
    second = await provider.embed_batch(["Cosine similarity ranks chunks"])

    assert len(first) == 64
    assert second == [first]
    assert cosine_similarity(first, first) == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_hashing_provider_shared_words_score_higher() -> None:
    provider = HashingEmbeddingProvider(dimensions=256)
    query, related, unrelated = await provider.embed_batch(
        [
            "how are chunks ranked",
            "chunks are ranked by similarity",
            "weather forecast for tomorrow",
        ]
    )

    assert cosine_similarity(query, related) > cosine_similarity(query, unrelated)


@pytest.mark.asyncio
async def test_hashing_provider_blank_text_is_zero_vector() -> None:
    provider = HashingEmbeddingProvider(dimensions=8)
    assert await provider.embed("...") == [0.0] * 8


def test_hashing_provider_rejects_bad_dimensions() -> None:
    with pytest.raises(ValueError, match="positive"):
        HashingEmbeddingProvider(dimensions=0)
