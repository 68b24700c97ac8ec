"""Retrieve across documents use case - one ranking over many documents."""

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from docrag.application.dto.retrieval_config import RetrievalConfig
from docrag.application.dto.retrieval_dto import DocumentRef, MultiDocumentRetrieval
from docrag.application.ports import Chunker
from docrag.application.use_cases.retrieval.retrieve_chunks import RetrieveChunksUseCase
from docrag.domain.entities import Chunk, SourceDocument
from docrag.domain.exceptions import NoExtractableContentError, TooManyDocumentsError

logger = structlog.get_logger()


class RetrieveAcrossDocumentsUseCase:
    """Chunk every document, then rank all chunks together against the query.

    Ranking is global: chunks from different documents compete for the
    same top K slots. All chunks go to the embedding provider in a
    single batch.
    """

    def __init__(
        self,
        chunker: Chunker,
        retrieve_chunks: RetrieveChunksUseCase,
    ) -> None:
        self._chunker = chunker
        self._retrieve_chunks = retrieve_chunks

    async def execute(
        self,
        query: str,
        documents: Sequence[SourceDocument | Mapping[str, Any]],
        config: RetrievalConfig,
        timeout: float | None = None,
    ) -> MultiDocumentRetrieval:
        """Rank chunks from all documents; raise before embedding on bad input."""
        if len(documents) > config.max_documents:
            raise TooManyDocumentsError(len(documents), config.max_documents)

        parsed = [
            d if isinstance(d, SourceDocument) else SourceDocument.from_dict(dict(d))
            for d in documents
        ]
        usable = [d for d in parsed if d.has_content]
        if not usable:
            raise NoExtractableContentError("No documents contain extractable text")

        corpus: list[Chunk] = []
        for document in usable:
            corpus.extend(self._chunker.chunk(document.content, config.chunking, document))
        if not corpus:
            raise NoExtractableContentError("Documents produced no searchable chunks")

        logger.debug(
            "corpus_built",
            documents=len(parsed),
            usable_documents=len(usable),
            chunks=len(corpus),
        )

        results = await self._retrieve_chunks.execute(query, corpus, config, timeout=timeout)
        return MultiDocumentRetrieval(
            results=results,
            documents_used=[DocumentRef(id=d.id, title=d.title) for d in usable],
        )
