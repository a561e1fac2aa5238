"""
Configuration layer for apimesh.

Policy objects controlling embedding generation, graph construction
and suggested orchestration templates.

Configuration in apimesh is:
- Explicit (passed, not global)
- Immutable (frozen dataclasses)
- Defaulted (every field has the reference policy value)
"""

from apimesh.config.settings import (
    EDGE_THRESHOLD,
    HIGH_SIMILARITY_THRESHOLD,
    EmbeddingConfig,
    GraphConfig,
    OrchestrationConfig,
    ApimeshConfig,
)

__all__ = [
    "EDGE_THRESHOLD",
    "HIGH_SIMILARITY_THRESHOLD",
    "EmbeddingConfig",
    "GraphConfig",
    "OrchestrationConfig",
    "ApimeshConfig",
]
