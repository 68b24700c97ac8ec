"""Boundary used when splitting text into chunks."""

from enum import StrEnum


class ChunkingStrategy(StrEnum):
    """Split on sentence ends or on whitespace."""

    SENTENCE = "sentence"
    WORD = "word"
