"""OpenAI-compatible embedding provider."""

import openai
import structlog
from openai import AsyncOpenAI

from docrag.domain.exceptions import EmbeddingProviderError
from docrag.domain.value_objects import Vector

logger = structlog.get_logger()


def _clean(text: str) -> str:
    return text.replace("\\n", " ").strip()


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        dimensions: int | None = None,
        timeout: float | None = None,
        max_retries: int = 2,
        client: AsyncOpenAI | None = None,
    ) -> None:
        if client is None:
            options = {"base_url": base_url, "api_key": api_key, "max_retries": max_retries}
            if timeout is not None:
                options["timeout"] = timeout
            client = AsyncOpenAI(**options)
        self._client = client
        self._model = model
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int | None:
        return self._dimensions

    async def embed(self, text: str) -> Vector:
        """Generate the embedding for a single text."""
        cleaned = _clean(text) if isinstance(text, str) else ""
        if not cleaned:
            raise EmbeddingProviderError("Invalid text input for embedding")
        vectors = await self._create([cleaned])
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[Vector]:
        """Generate embeddings for texts, in input order."""
        if not texts:
            return []
        cleaned = [_clean(t) for t in texts]
        if any(not t for t in cleaned):
            raise EmbeddingProviderError("Cannot embed empty text")
        return await self._create(cleaned)

    async def _create(self, texts: list[str]) -> list[Vector]:
        kwargs = {"model": self._model, "input": texts}
        if self._dimensions:
            kwargs["dimensions"] = self._dimensions
        try:
            response = await self._client.embeddings.create(**kwargs)
        except openai.OpenAIError as e:
            logger.warning(
                "embedding_request_failed",
                model=self._model,
                batch_size=len(texts),
                error=str(e),
            )
            raise EmbeddingProviderError(f"Failed to generate embeddings: {e}") from e

        data = sorted(response.data, key=lambda d: d.index)
        if len(data) != len(texts):
            raise EmbeddingProviderError(
                f"Embedding API returned {len(data)} vectors for {len(texts)} texts"
            )
        return [list(d.embedding) for d in data]
