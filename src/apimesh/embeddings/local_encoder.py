from __future__ import annotations

import numpy as np

from apimesh.config.settings import CHAR_SCALE, EMBEDDING_DIMENSION
from apimesh.embeddings.encoder import EmbeddingProvider


class CharFoldEmbeddingProvider(EmbeddingProvider):
    """
    Deterministic, model-free provider.

    Character codes of the signature are folded into a fixed-length
    accumulator (``position = index mod dimension``), scaled, then
    L2-normalized. Identical descriptors always yield identical vectors;
    the vectors carry no real semantics.
    """

    def __init__(
        self,
        dimension: int = EMBEDDING_DIMENSION,
        *,
        char_scale: float = CHAR_SCALE,
    ) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        super().__init__(dimension=dimension)
        self.char_scale = char_scale

    def _encode_text(self, text: str) -> np.ndarray:
        acc = np.zeros(self.dimension, dtype=float)

        for i, ch in enumerate(text):
            acc[i % self.dimension] += ord(ch) * self.char_scale

        norm = np.linalg.norm(acc)
        if norm > 0:
            acc = acc / norm

        return acc
