"""
Graph subsystem for apimesh.

Turns descriptor embeddings into a semantic graph:
- nodes carrying descriptor metadata
- threshold-gated similarity edges
- type and capability clusters
- recommendations synthesized from edge data
"""

from apimesh.graph.graph_schema import (
    EdgeKind,
    ClusterKind,
    Priority,
    GraphNode,
    GraphEdge,
    Cluster,
    Recommendation,
    GraphMetadata,
    SemanticGraph,
)
from apimesh.graph.graph_store import GraphStore
from apimesh.graph.graph_builder import SemanticGraphBuilder
from apimesh.graph.graph_query import GraphQueryEngine

__all__ = [
    "EdgeKind",
    "ClusterKind",
    "Priority",
    "GraphNode",
    "GraphEdge",
    "Cluster",
    "Recommendation",
    "GraphMetadata",
    "SemanticGraph",
    "GraphStore",
    "SemanticGraphBuilder",
    "GraphQueryEngine",
]
