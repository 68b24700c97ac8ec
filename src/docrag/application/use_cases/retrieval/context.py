"""Format retrieved chunks as prompt context for answer generation."""

from enum import StrEnum

from docrag.domain.entities import ScoredChunk


class ContextStyle(StrEnum):
    """Source labelling used in the generated context."""

    SINGLE = "single"
    MULTI = "multi"


def build_context(results: list[ScoredChunk], style: ContextStyle = ContextStyle.MULTI) -> str:
    """Join results into one labelled block, blank line between entries."""
    parts = []
    for number, result in enumerate(results, start=1):
        title = result.chunk.document_title
        if style == ContextStyle.SINGLE:
            label = f'[Source {number} from "{title}"]'
        else:
            label = f'[From "{title}"]'
        parts.append(f"{label}: {result.chunk.content}")
    return "\n\n".join(parts)


def source_excerpt(content: str, limit: int = 200) -> str:
    """Preview of a chunk for source listings."""
    if len(content) <= limit:
        return content
    return content[:limit] + "..."
