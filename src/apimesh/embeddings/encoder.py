from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Tuple
import numpy as np

from apimesh.descriptors.schema import ServiceDescriptor
from apimesh.errors import ProviderFailure
from apimesh.utils.text import hash_text


@dataclass(frozen=True, eq=False)
class EmbeddingVector:
    """
    Embedding of one descriptor.

    Descriptor metadata is copied at generation time so that graph
    nodes can be rendered without joining back to the descriptor.
    """

    api_id: str
    vector: np.ndarray
    name: str
    type: str
    capabilities: Tuple[str, ...]
    description: str

    @staticmethod
    def create(descriptor: ServiceDescriptor, vector: np.ndarray) -> "EmbeddingVector":
        return EmbeddingVector(
            api_id=descriptor.id,
            vector=vector,
            name=descriptor.name,
            type=descriptor.type,
            capabilities=tuple(descriptor.capabilities),
            description=descriptor.description,
        )

    @property
    def dimension(self) -> int:
        return int(self.vector.shape[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "api_id": self.api_id,
            "embedding": self.vector.tolist(),
            "metadata": {
                "name": self.name,
                "type": self.type,
                "capabilities": list(self.capabilities),
                "description": self.description,
            },
        }


class EmbeddingProvider(ABC):
    """
    Abstract embedding provider.

    Concrete implementations may wrap:
    - the deterministic character-fold fallback
    - sentence transformers
    - hosted embedding APIs

    Every implementation turns a descriptor into a vector of
    fixed ``dimension``; nothing downstream depends on more than that.
    """

    def __init__(self, dimension: int) -> None:
        self.dimension = dimension
        self._cache: Dict[str, np.ndarray] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def embed(self, descriptor: ServiceDescriptor) -> np.ndarray:
        """
        Embed a single descriptor.

        Raises ProviderFailure when the encoder errors or returns a
        vector of the wrong shape.
        """
        text = self.signature(descriptor)
        key = self._hash(text)

        if key not in self._cache:
            try:
                raw = self._encode_text(text)
            except ProviderFailure:
                raise
            except Exception as exc:
                raise ProviderFailure(descriptor.id, str(exc)) from exc

            vec = np.asarray(raw, dtype=float)
            if vec.shape != (self.dimension,):
                raise ProviderFailure(
                    descriptor.id,
                    f"expected shape ({self.dimension},), got {vec.shape}",
                )
            vec.setflags(write=False)
            self._cache[key] = vec

        return self._cache[key]

    @staticmethod
    def signature(descriptor: ServiceDescriptor) -> str:
        """
        Text signature fed to the encoder.
        """
        return " ".join(
            [
                descriptor.name,
                descriptor.type,
                descriptor.description,
                " ".join(descriptor.capabilities),
            ]
        )

    # ------------------------------------------------------------------
    # Implementation contract
    # ------------------------------------------------------------------

    @abstractmethod
    def _encode_text(self, text: str) -> np.ndarray:
        """
        Encode a descriptor signature into a vector of ``dimension``.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def _hash(self, text: str) -> str:
        """
        Stable cache key incorporating provider identity.
        Prevents silent reuse across different providers/configs.
        """
        return hash_text(f"{self.__class__.__name__}:{self.dimension}:{text}")
