"""Retrieval API resources."""

from typing import Any

import falcon.asgi
import structlog

from docrag.application.dto.retrieval_config import RetrievalConfig
from docrag.application.dto.retrieval_dto import average_similarity
from docrag.application.ports import Chunker
from docrag.application.use_cases.retrieval.context import (
    ContextStyle,
    build_context,
    source_excerpt,
)
from docrag.application.use_cases.retrieval.retrieve_across_documents import (
    RetrieveAcrossDocumentsUseCase,
)
from docrag.application.use_cases.retrieval.retrieve_chunks import RetrieveChunksUseCase
from docrag.domain.entities import Chunk, ScoredChunk, SourceDocument
from docrag.domain.exceptions import (
    DimensionMismatchError,
    EmbeddingProviderError,
    InvalidEmbeddingError,
    NoExtractableContentError,
    TooManyDocumentsError,
    ValidationError,
)

logger = structlog.get_logger()

_CONFIG_KEYS = ("top_k", "similarity_threshold", "chunk_size", "chunk_strategy")


def _config_from_body(
    body: dict[str, Any], preset: str, defaults: dict[str, Any]
) -> RetrievalConfig:
    """Preset, then configured defaults, then request values."""
    overrides = dict(defaults)
    overrides.update({k: body[k] for k in _CONFIG_KEYS if body.get(k) is not None})
    if preset == "single":
        return RetrievalConfig.single_document(**overrides)
    return RetrievalConfig.multi_document(**overrides)


def _query_from_body(body: dict[str, Any]) -> str:
    query = body.get("query")
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("Query is required and cannot be empty")
    return query


def _chunk_from_dict(data: Any, position: int) -> Chunk | None:
    if not isinstance(data, dict):
        raise ValidationError(f"Chunk {position} must be an object")
    content = data.get("content")
    if not isinstance(content, str):
        raise ValidationError(f"Chunk {position} content must be a string")
    if not content.strip():
        return None
    try:
        return Chunk(
            content=content,
            chunk_index=int(data.get("chunk_index", position)),
            start_offset=int(data.get("start_offset", 0)),
            end_offset=int(data.get("end_offset", len(content))),
            document_id=None if data.get("document_id") is None else str(data["document_id"]),
            document_title=str(data.get("document_title") or "Untitled"),
            metadata=dict(data.get("metadata") or {}),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Chunk {position} is invalid: {e}") from e


def _serialize(result: ScoredChunk) -> dict[str, Any]:
    chunk = result.chunk
    return {
        "content": chunk.content,
        "excerpt": source_excerpt(chunk.content),
        "document_id": chunk.document_id,
        "document_title": chunk.document_title,
        "chunk_index": chunk.chunk_index,
        "start_offset": chunk.start_offset,
        "end_offset": chunk.end_offset,
        "similarity": round(result.similarity, 6),
        "metadata": chunk.metadata,
    }


def _render_error(resp: falcon.asgi.Response, error: Exception) -> None:
    """Map domain errors onto HTTP responses."""
    if isinstance(error, NoExtractableContentError):
        resp.status = falcon.HTTP_422
        resp.media = {"error": str(error), "reason": "nothing_to_search"}
    elif isinstance(error, TooManyDocumentsError):
        resp.status = falcon.HTTP_400
        resp.media = {"error": str(error), "limit": error.limit}
    elif isinstance(error, EmbeddingProviderError):
        logger.warning("retrieval_failed", error=str(error))
        resp.status = falcon.HTTP_502
        resp.media = {"error": "Search failed", "detail": str(error)}
    else:
        resp.status = falcon.HTTP_400
        resp.media = {"error": str(error)}


_HANDLED = (
    ValidationError,
    DimensionMismatchError,
    InvalidEmbeddingError,
    NoExtractableContentError,
    TooManyDocumentsError,
    EmbeddingProviderError,
)


class RetrieveResource:
    """POST /v1/retrieve - rank chunks (or one text) against a query."""

    def __init__(
        self,
        retrieve_chunks: RetrieveChunksUseCase,
        chunker: Chunker,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        self._retrieve_chunks = retrieve_chunks
        self._chunker = chunker
        self._defaults = defaults or {}

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Single-corpus retrieval."""
        try:
            body = await req.get_media()
        except falcon.HTTPBadRequest:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        try:
            query = _query_from_body(body)
            config = _config_from_body(body, "single", self._defaults)
            chunks = self._chunks_from_body(body, config)
            results = await self._retrieve_chunks.execute(query, chunks, config)
        except _HANDLED as e:
            _render_error(resp, e)
            return

        resp.media = {
            "query": query,
            "chunks_used": len(results),
            "average_similarity": round(average_similarity(results), 6),
            "context": build_context(results, ContextStyle.SINGLE),
            "results": [_serialize(r) for r in results],
        }
        resp.status = falcon.HTTP_200

    def _chunks_from_body(self, body: dict[str, Any], config: RetrievalConfig) -> list[Chunk]:
        text = body.get("text")
        if text is not None:
            if not isinstance(text, str):
                raise ValidationError("text must be a string")
            if not text.strip():
                raise NoExtractableContentError("Document has no extractable text content")
            document = SourceDocument(
                id=str(body.get("document_id") or "document"),
                title=str(body.get("document_title") or "Untitled"),
                content=text,
            )
            return self._chunker.chunk(text, config.chunking, document)

        raw = body.get("chunks")
        if not isinstance(raw, list):
            raise ValidationError("Either text or chunks is required")
        chunks = [_chunk_from_dict(item, i) for i, item in enumerate(raw)]
        return [c for c in chunks if c is not None]


class DocumentRetrieveResource:
    """POST /v1/retrieve/documents - rank chunks across several documents."""

    def __init__(
        self,
        retrieve_across_documents: RetrieveAcrossDocumentsUseCase,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        self._retrieve_across_documents = retrieve_across_documents
        self._defaults = defaults or {}

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Multi-document retrieval with source breakdown."""
        try:
            body = await req.get_media()
        except falcon.HTTPBadRequest:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        try:
            query = _query_from_body(body)
            config = _config_from_body(body, "multi", self._defaults)
            raw = body.get("documents")
            if not isinstance(raw, list) or not raw:
                raise ValidationError("Document list is required")
            if len(raw) > config.max_documents:
                raise TooManyDocumentsError(len(raw), config.max_documents)
            documents = [SourceDocument.from_dict(d) for d in raw]
            retrieval = await self._retrieve_across_documents.execute(query, documents, config)
        except _HANDLED as e:
            _render_error(resp, e)
            return

        resp.media = {
            "query": query,
            "chunks_used": len(retrieval.results),
            "average_similarity": round(retrieval.average_similarity, 6),
            "source_breakdown": retrieval.source_breakdown,
            "documents_used": [
                {"id": d.id, "title": d.title} for d in retrieval.documents_used
            ],
            "context": build_context(retrieval.results, ContextStyle.MULTI),
            "results": [_serialize(r) for r in retrieval.results],
        }
        resp.status = falcon.HTTP_200
