"""Retrieve chunks use case - rank a chunk corpus against a query."""

import asyncio
import time

import structlog

from docrag.application.dto.retrieval_config import RetrievalConfig
from docrag.application.ports import EmbeddingProvider
from docrag.domain.entities import Chunk, ScoredChunk
from docrag.domain.exceptions import DocRAGError, EmbeddingProviderError
from docrag.domain.services.similarity import cosine_scores, ensure_valid
from docrag.domain.value_objects import Vector

logger = structlog.get_logger()


def clean_chunk_text(content: str) -> str:
    """Text actually sent for embedding: escaped newlines flattened, trimmed."""
    return content.replace("\\n", " ").strip()


class RetrieveChunksUseCase:
    """Score chunks by cosine similarity to the query, keep the top K above threshold."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        timeout: float | None = None,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._timeout = timeout

    async def execute(
        self,
        query: str,
        chunks: list[Chunk],
        config: RetrievalConfig,
        timeout: float | None = None,
    ) -> list[ScoredChunk]:
        """Return chunks ranked by similarity, best first.

        An empty query or corpus yields an empty list. Any embedding
        failure aborts the call with EmbeddingProviderError.
        """
        if not query or not clean_chunk_text(query) or not chunks:
            return []

        candidates = [(c, clean_chunk_text(c.content)) for c in chunks]
        candidates = [(c, text) for c, text in candidates if text]
        if not candidates:
            return []

        started = time.monotonic()
        query_vector, chunk_vectors = await self._embed(
            query,
            [text for _, text in candidates],
            timeout if timeout is not None else self._timeout,
        )

        scores = cosine_scores(query_vector, chunk_vectors)
        scored = [
            ScoredChunk(chunk=chunk, similarity=score, embedding=vector)
            for (chunk, _), vector, score in zip(candidates, chunk_vectors, scores, strict=True)
        ]
        relevant = [s for s in scored if s.similarity >= config.similarity_threshold]
        # sorted() is stable with reverse=True: ties keep emission order
        ranked = sorted(relevant, key=lambda s: s.similarity, reverse=True)[: config.top_k]

        logger.info(
            "retrieval_completed",
            candidates=len(candidates),
            above_threshold=len(relevant),
            returned=len(ranked),
            threshold=config.similarity_threshold,
            top_k=config.top_k,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return ranked

    async def _embed(
        self,
        query: str,
        texts: list[str],
        timeout: float | None,
    ) -> tuple[Vector, list[Vector]]:
        """Embed query and chunk batch concurrently; both must succeed."""
        query_task = asyncio.ensure_future(self._embedding_provider.embed(query))
        batch_task = asyncio.ensure_future(self._embedding_provider.embed_batch(texts))
        try:
            async with asyncio.timeout(timeout):
                query_vector, chunk_vectors = await asyncio.gather(query_task, batch_task)
        except TimeoutError as e:
            if timeout is None:
                raise EmbeddingProviderError("Embedding request timed out") from e
            raise EmbeddingProviderError(
                f"Embedding timed out after {timeout} seconds"
            ) from e
        except DocRAGError:
            raise
        except Exception as e:
            raise EmbeddingProviderError(f"Embedding provider failed: {e}") from e
        finally:
            for task in (query_task, batch_task):
                if not task.done():
                    task.cancel()
                elif not task.cancelled():
                    # mark a second failure as retrieved
                    task.exception()

        if len(chunk_vectors) != len(texts):
            raise EmbeddingProviderError(
                f"Embedding provider returned {len(chunk_vectors)} vectors for {len(texts)} texts"
            )

        dimensions = self._embedding_provider.dimensions
        ensure_valid(query_vector, dimensions)
        for vector in chunk_vectors:
            ensure_valid(vector, dimensions or len(query_vector))
        return list(query_vector), [list(v) for v in chunk_vectors]
