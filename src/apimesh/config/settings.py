from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Tuple

# ---------------------------------------------------------------------
# Policy constants
# ---------------------------------------------------------------------

EMBEDDING_DIMENSION = 384
CHAR_SCALE = 0.001

EDGE_THRESHOLD = 0.3
HIGH_SIMILARITY_THRESHOLD = 0.8
SIMILAR_API_THRESHOLD = 0.7
PROTOCOL_HISTORY_LIMIT = 1000

COMPLEMENTARY_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("ai", "version-control"),
    ("ai", "storage"),
    ("version-control", "ci-cd"),
)


# ---------------------------------------------------------------------
# Embedding generation
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class EmbeddingConfig:
    """
    Selects and parameterizes the embedding provider.

    ``local`` is the deterministic character-fold provider; ``huggingface``
    loads a sentence encoder and ignores ``dimension`` / ``char_scale``.
    """

    provider: Literal["local", "huggingface"] = "local"
    dimension: int = EMBEDDING_DIMENSION
    char_scale: float = CHAR_SCALE
    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"


# ---------------------------------------------------------------------
# Graph construction
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class GraphConfig:
    """
    Controls which relationships survive into the semantic graph
    and which observations are raised as recommendations.
    """

    edge_threshold: float = EDGE_THRESHOLD
    high_similarity_threshold: float = HIGH_SIMILARITY_THRESHOLD
    min_cluster_size: int = 2
    capability_saturation_min: int = 3
    complementary_pairs: Tuple[Tuple[str, str], ...] = COMPLEMENTARY_PAIRS


# ---------------------------------------------------------------------
# Orchestration templates
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class OrchestrationConfig:
    """
    Keyword triggers and target selection for suggested flows.
    """

    text_keywords: Tuple[str, ...] = ("text", "content")
    store_keywords: Tuple[str, ...] = ("save", "store")
    ai_type: str = "ai"
    storage_capability: str = "repository-management"
    storage_type: str = "version-control"


# ---------------------------------------------------------------------
# Root configuration object
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class ApimeshConfig:
    """
    Root configuration object for apimesh.

    Constructed once by the host and passed to each subsystem.
    """

    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)
    orchestration: OrchestrationConfig = field(default_factory=OrchestrationConfig)
    similar_threshold: float = SIMILAR_API_THRESHOLD
    protocol_history_limit: int = PROTOCOL_HISTORY_LIMIT
