"""
Embedding subsystem for apimesh.

Provides descriptor encoding and similarity primitives used by:
- semantic graph construction
- similar-API lookup

Providers are pluggable; the rest of the system only relies on
"fixed dimension, similarity-comparable".
"""

from apimesh.embeddings.encoder import EmbeddingProvider, EmbeddingVector
from apimesh.embeddings.local_encoder import CharFoldEmbeddingProvider
from apimesh.embeddings.similarity import SimilarityComputer, SimilarityRecord
from apimesh.embeddings.engine import EmbeddingEngine, build_provider

__all__ = [
    "EmbeddingProvider",
    "EmbeddingVector",
    "CharFoldEmbeddingProvider",
    "SimilarityComputer",
    "SimilarityRecord",
    "EmbeddingEngine",
    "build_provider",
]
