"""Fixtures for API tests."""

import falcon.asgi
import pytest
from falcon.testing import TestClient

from docrag.application.dto.retrieval_config import DEFAULT_MAX_DOCUMENTS
from docrag.application.use_cases.retrieval.retrieve_across_documents import (
    RetrieveAcrossDocumentsUseCase,
)
from docrag.application.use_cases.retrieval.retrieve_chunks import RetrieveChunksUseCase
from docrag.infrastructure.chunking.boundary_chunker import BoundaryChunker
from docrag.interfaces.api.app import create_app
from docrag.interfaces.api.resources.health import HealthResource
from docrag.interfaces.api.resources.retrieval import (
    DocumentRetrieveResource,
    RetrieveResource,
)

from tests.conftest import FakeEmbeddingProvider

VECTORS = {
    "cats": [1.0, 0.0],
    "Cats purr softly.": [0.9, 0.1],
    "Dogs bark loudly.": [0.0, 1.0],
    "Cats sleep all day.": [1.0, 0.0],
}


@pytest.fixture
def embedding_provider() -> FakeEmbeddingProvider:
    """Provider knowing the pet sentences used across API tests."""
    return FakeEmbeddingProvider(vectors=dict(VECTORS))


@pytest.fixture
def app(embedding_provider) -> falcon.asgi.App:
    """Falcon ASGI app with retrieval resources for testing."""
    chunker = BoundaryChunker()
    retrieve_chunks = RetrieveChunksUseCase(embedding_provider=embedding_provider)
    retrieve_across_documents = RetrieveAcrossDocumentsUseCase(
        chunker=chunker,
        retrieve_chunks=retrieve_chunks,
    )
    defaults = {"max_documents": DEFAULT_MAX_DOCUMENTS}
    return create_app(
        retrieve_resource=RetrieveResource(retrieve_chunks, chunker, defaults),
        document_retrieve_resource=DocumentRetrieveResource(retrieve_across_documents, defaults),
        health_resource=HealthResource("fake"),
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
