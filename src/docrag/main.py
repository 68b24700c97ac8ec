"""Application entry point and composition root."""

import sys

import structlog

from docrag import __version__
from docrag.application.use_cases.retrieval.retrieve_across_documents import (
    RetrieveAcrossDocumentsUseCase,
)
from docrag.application.use_cases.retrieval.retrieve_chunks import RetrieveChunksUseCase
from docrag.config import Settings, get_settings
from docrag.infrastructure.chunking.boundary_chunker import BoundaryChunker
from docrag.infrastructure.embedding.hashing_provider import HashingEmbeddingProvider
from docrag.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from docrag.infrastructure.logging_setup import configure_logging
from docrag.interfaces.api.app import create_app
from docrag.interfaces.api.middleware.cors import CORSMiddleware
from docrag.interfaces.api.resources.health import HealthResource
from docrag.interfaces.api.resources.retrieval import (
    DocumentRetrieveResource,
    RetrieveResource,
)

logger = structlog.get_logger()


def create_embedding_provider(settings: Settings):
    """Embedding adapter selected by settings."""
    if settings.embedding_backend == "hashing":
        return HashingEmbeddingProvider(dimensions=settings.embedding_dimensions or 384)
    return OpenAIEmbeddingProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
        dimensions=settings.embedding_dimensions,
        timeout=settings.embedding_timeout,
        max_retries=settings.embedding_max_retries,
    )


def create_docrag_app(settings: Settings | None = None, embedding_provider=None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    embedding_provider = embedding_provider or create_embedding_provider(settings)
    chunker = BoundaryChunker()

    retrieve_chunks = RetrieveChunksUseCase(
        embedding_provider=embedding_provider,
        timeout=settings.embedding_timeout,
    )
    retrieve_across_documents = RetrieveAcrossDocumentsUseCase(
        chunker=chunker,
        retrieve_chunks=retrieve_chunks,
    )

    defaults = settings.retrieval_overrides()
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

    logger.info(
        "app_created",
        environment=settings.environment,
        embedding_backend=settings.embedding_backend,
        embedding_model=settings.embedding_model,
        max_documents=settings.max_documents,
    )
    return create_app(
        retrieve_resource=RetrieveResource(retrieve_chunks, chunker, defaults),
        document_retrieve_resource=DocumentRetrieveResource(
            retrieve_across_documents, defaults
        ),
        health_resource=HealthResource(settings.embedding_backend),
        middleware=[CORSMiddleware(cors_origins)],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)
    app = create_docrag_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) > 1 and sys.argv[1] == "serve":
        run_server()
        return
    print(f"docrag v{__version__}")
