from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence, Tuple
import numpy as np

from apimesh.errors import DimensionMismatch
from apimesh.embeddings.encoder import EmbeddingVector


@dataclass(frozen=True)
class SimilarityRecord:
    """
    Pairwise similarity between two embedded descriptors.

    Derived on demand; only ever persisted as part of a graph.
    """

    api_a: str
    api_b: str
    score: float
    shared_capabilities: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "api1": self.api_a,
            "api2": self.api_b,
            "similarity": self.score,
            "shared_capabilities": list(self.shared_capabilities),
        }


class SimilarityComputer:
    """
    Computes similarity between embeddings.
    Stateless; every method is a pure function of its inputs.
    """

    # ------------------------------------------------------------------
    # Core similarities
    # ------------------------------------------------------------------

    @staticmethod
    def cosine(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
        """
        Cosine similarity. Zero-norm inputs score 0.0 rather than NaN.

        Raises DimensionMismatch for vectors of unequal length.
        """
        a = np.asarray(a, dtype=float)
        b = np.asarray(b, dtype=float)

        if a.shape[0] != b.shape[0]:
            raise DimensionMismatch(a.shape[0], b.shape[0])

        norm_a = np.linalg.norm(a)
        norm_b = np.linalg.norm(b)
        if norm_a == 0.0 or norm_b == 0.0:
            return 0.0
        return float(np.dot(a, b) / (norm_a * norm_b))

    # ------------------------------------------------------------------
    # Descriptor-level comparison
    # ------------------------------------------------------------------

    @staticmethod
    def shared_capabilities(
        a: Iterable[str],
        b: Iterable[str],
    ) -> Tuple[str, ...]:
        """
        Capabilities declared by both sides, in the order ``a`` declares them.
        """
        other = set(b)
        return tuple(cap for cap in dict.fromkeys(a) if cap in other)

    @staticmethod
    def compare(a: EmbeddingVector, b: EmbeddingVector) -> SimilarityRecord:
        return SimilarityRecord(
            api_a=a.api_id,
            api_b=b.api_id,
            score=SimilarityComputer.cosine(a.vector, b.vector),
            shared_capabilities=SimilarityComputer.shared_capabilities(
                a.capabilities, b.capabilities
            ),
        )
