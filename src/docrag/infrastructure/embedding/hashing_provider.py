"""Deterministic offline embedding provider.

Hashes words into a fixed-size vector so texts sharing vocabulary score
higher cosine similarity. Needs no API key; used for local development
and demos.
"""

import hashlib

import numpy as np

from docrag.domain.value_objects import Vector


class HashingEmbeddingProvider:
    """Word-hashing embeddings with stable output for a given text."""

    def __init__(self, dimensions: int = 384) -> None:
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed(self, text: str) -> Vector:
        return self._generate(text)

    async def embed_batch(self, texts: list[str]) -> list[Vector]:
        return [self._generate(t) for t in texts]

    def _generate(self, text: str) -> Vector:
        vector = np.zeros(self._dimensions, dtype=np.float64)
        for word in text.lower().split():
            token = word.strip(".,;:!?\"'()[]{}")
            if not token:
                continue
            seed = int(hashlib.md5(token.encode()).hexdigest()[:8], 16)
            rng = np.random.RandomState(seed)
            vector += rng.randn(self._dimensions)

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm
        return vector.tolist()
