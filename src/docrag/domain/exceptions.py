"""Domain exceptions."""


class DocRAGError(Exception):
    """Base exception for docrag."""

    pass


class ValidationError(DocRAGError):
    """Validation failed for input data."""

    pass


class DimensionMismatchError(DocRAGError):
    """Two vectors compared have different lengths."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Embedding dimensions do not match: {left} != {right}")
        self.left = left
        self.right = right


class InvalidEmbeddingError(DocRAGError):
    """Vector is empty, not a sequence, or contains non-finite values."""

    pass


class EmbeddingProviderError(DocRAGError):
    """The embedding capability failed or timed out."""

    pass


class NoExtractableContentError(DocRAGError):
    """Every input document collapsed to empty content."""

    pass


class TooManyDocumentsError(DocRAGError):
    """Input exceeds the per-call document cap."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Maximum {limit} documents allowed per query, got {count}")
        self.count = count
        self.limit = limit
