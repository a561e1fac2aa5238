"""
apimesh
=======

Semantic relationship graph over discovered API descriptors, and a
small workflow engine that sequences typed steps against those APIs.

Pipeline:
- descriptors -> embedding provider -> vectors
- vectors -> pairwise similarity -> semantic graph
- descriptors -> orchestration engine -> flows -> step results

Public API:
- ServiceDescriptor
- EmbeddingEngine
- SemanticGraphBuilder
- OrchestrationEngine
"""

from apimesh.descriptors.schema import ServiceDescriptor
from apimesh.embeddings.engine import EmbeddingEngine
from apimesh.graph.graph_builder import SemanticGraphBuilder
from apimesh.orchestration.engine import OrchestrationEngine

__all__ = [
    "ServiceDescriptor",
    "EmbeddingEngine",
    "SemanticGraphBuilder",
    "OrchestrationEngine",
]

__version__ = "0.1.0"
