"""Unit tests for domain exceptions."""

import pytest

from docrag.domain.exceptions import (
    DimensionMismatchError,
    DocRAGError,
    EmbeddingProviderError,
    InvalidEmbeddingError,
    NoExtractableContentError,
    TooManyDocumentsError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        DimensionMismatchError,
        EmbeddingProviderError,
        InvalidEmbeddingError,
        NoExtractableContentError,
        TooManyDocumentsError,
        ValidationError,
    ],
)
def test_errors_inherit_docrag_error(error_type: type) -> None:
    assert issubclass(error_type, DocRAGError)


def test_no_content_is_distinct_from_provider_failure() -> None:
    """Callers can tell 'nothing to search' from 'search broke'."""
    assert not issubclass(NoExtractableContentError, EmbeddingProviderError)
    assert not issubclass(EmbeddingProviderError, NoExtractableContentError)


def test_dimension_mismatch_message() -> None:
    error = DimensionMismatchError(3, 4)
    assert str(error) == "Embedding dimensions do not match: 3 != 4"


def test_too_many_documents_carries_limit() -> None:
    error = TooManyDocumentsError(11, 10)
    assert error.count == 11
    assert error.limit == 10
    assert "Maximum 10 documents" in str(error)


def test_raise_provider_error_catchable_as_docrag_error() -> None:
    with pytest.raises(DocRAGError, match="quota"):
        raise EmbeddingProviderError("quota exceeded")
