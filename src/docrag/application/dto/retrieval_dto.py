"""Retrieval output DTOs."""

from collections import Counter
from dataclasses import dataclass, field

from docrag.domain.entities import ScoredChunk


def average_similarity(results: list[ScoredChunk]) -> float:
    """Mean similarity of the results, 0.0 when there are none."""
    if not results:
        return 0.0
    return sum(r.similarity for r in results) / len(results)


@dataclass(frozen=True)
class DocumentRef:
    """Document that contributed chunks to the corpus."""

    id: str
    title: str


@dataclass
class MultiDocumentRetrieval:
    """Ranked results across documents, with per-document attribution."""

    results: list[ScoredChunk]
    documents_used: list[DocumentRef] = field(default_factory=list)

    @property
    def source_breakdown(self) -> dict[str, int]:
        """Count of result chunks per document title."""
        return dict(Counter(r.chunk.document_title for r in self.results))

    @property
    def average_similarity(self) -> float:
        return average_similarity(self.results)
