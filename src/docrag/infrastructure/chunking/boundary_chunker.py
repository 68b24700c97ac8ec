"""Sentence and word boundary chunker."""

import re
from dataclasses import dataclass

from docrag.application.dto.chunking_config import ChunkingConfig
from docrag.domain.entities import Chunk, SourceDocument
from docrag.domain.value_objects import ChunkingStrategy

# Leading punctuation only survives on the first piece; later runs are
# consumed as the trailing punctuation of the previous sentence.
_SENTENCE_RE = re.compile(r"[.!?]*([^.!?]+)[.!?]*")
_WORD_RE = re.compile(r"\S+")

# Sentence chunks this short are punctuation noise.
_MIN_SENTENCE_CHUNK = 3


@dataclass(frozen=True)
class _Piece:
    """Sentence or word located in the source text."""

    start: int
    end: int


class BoundaryChunker:
    """Chunker that packs whole sentences or words up to a size budget.

    Size is measured on the source span a chunk would cover, so runs of
    whitespace or punctuation between pieces count against the budget. A
    piece longer than the budget becomes its own chunk.
    Chunk content is the exact slice of the source text, so offsets
    always satisfy ``text[start_offset:end_offset] == content``.
    """

    def chunk(
        self,
        text: str,
        config: ChunkingConfig,
        document: SourceDocument | None = None,
    ) -> list[Chunk]:
        """Split text into chunks tagged with the owning document."""
        if not text or not text.strip():
            return []

        if config.strategy == ChunkingStrategy.SENTENCE:
            pieces = self._sentences(text)
            min_length = _MIN_SENTENCE_CHUNK
        elif config.strategy == ChunkingStrategy.WORD:
            pieces = self._words(text)
            min_length = 0
        else:
            raise ValueError(f"Unsupported strategy: {config.strategy}")

        spans = self._pack(pieces, config.chunk_size)

        chunks: list[Chunk] = []
        for start, end in spans:
            content = text[start:end]
            if len(content.strip()) <= min_length:
                continue
            chunks.append(
                Chunk(
                    content=content,
                    chunk_index=len(chunks),
                    start_offset=start,
                    end_offset=end,
                    document_id=document.id if document else None,
                    document_title=document.title if document else "Untitled",
                    metadata=dict(document.metadata) if document else {},
                )
            )
        return chunks

    @staticmethod
    def _sentences(text: str) -> list[_Piece]:
        pieces: list[_Piece] = []
        for match in _SENTENCE_RE.finditer(text):
            body = match.group(1).strip()
            raw = match.group(0)
            start = match.start() + len(raw) - len(raw.lstrip())
            end = match.start() + len(raw.rstrip())
            if not body:
                # stray punctuation between sentences stays with the previous one
                if pieces and end > start:
                    last = pieces[-1]
                    pieces[-1] = _Piece(start=last.start, end=end)
                continue
            pieces.append(_Piece(start=start, end=end))
        return pieces

    @staticmethod
    def _words(text: str) -> list[_Piece]:
        return [
            _Piece(start=m.start(), end=m.end()) for m in _WORD_RE.finditer(text)
        ]

    @staticmethod
    def _pack(pieces: list[_Piece], max_size: int) -> list[tuple[int, int]]:
        """Greedily group pieces into (start, end) spans.

        A piece joins the current group while the source span from the
        group's first piece to the end of this one stays within max_size.
        """
        spans: list[tuple[int, int]] = []
        start: int | None = None
        end = 0

        for piece in pieces:
            if start is not None and piece.end - start > max_size:
                spans.append((start, end))
                start = None
            if start is None:
                start = piece.start
            end = piece.end

        if start is not None:
            spans.append((start, end))
        return spans
