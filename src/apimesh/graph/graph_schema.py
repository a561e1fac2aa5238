from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from apimesh.embeddings.encoder import EmbeddingVector


class EdgeKind(str, Enum):
    SAME_TYPE = "same-type"
    COMPLEMENTARY = "complementary"
    CROSS_TYPE = "cross-type"


class ClusterKind(str, Enum):
    TYPE = "type-based"
    CAPABILITY = "capability-based"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class GraphNode:
    """
    One API in the graph, carrying its denormalized descriptor metadata.
    """

    id: str
    name: str
    type: str
    capabilities: Tuple[str, ...]
    description: str

    @staticmethod
    def from_vector(vector: EmbeddingVector) -> "GraphNode":
        return GraphNode(
            id=vector.api_id,
            name=vector.name,
            type=vector.type,
            capabilities=tuple(vector.capabilities),
            description=vector.description,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "capabilities": list(self.capabilities),
            "description": self.description,
        }


@dataclass(frozen=True)
class GraphEdge:
    """
    Undirected similarity relationship between two distinct nodes.
    ``source`` precedes ``target`` in node order.
    """

    source: str
    target: str
    weight: float
    kind: EdgeKind
    shared_capabilities: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "weight": self.weight,
            "type": self.kind.value,
            "shared_capabilities": list(self.shared_capabilities),
        }


@dataclass(frozen=True)
class Cluster:
    id: str
    name: str
    kind: ClusterKind
    members: Tuple[str, ...]
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "members": list(self.members),
            "description": self.description,
        }


@dataclass(frozen=True)
class Recommendation:
    """
    Actionable observation derived from similarity data.
    """

    type: str
    priority: Priority
    title: str
    description: str
    suggested_action: str
    affected_apis: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "priority": self.priority.value,
            "title": self.title,
            "description": self.description,
            "suggested_action": self.suggested_action,
            "affected_apis": list(self.affected_apis),
        }


@dataclass(frozen=True)
class GraphMetadata:
    generated_at: str
    total_apis: int
    total_connections: int
    title: str = "API Semantic Communication Graph"
    description: str = "Semantic relationships between discovered APIs"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "generated_at": self.generated_at,
            "total_apis": self.total_apis,
            "total_connections": self.total_connections,
        }


@dataclass(frozen=True)
class SemanticGraph:
    """
    Aggregate output of graph construction.

    This is the plain structured document handed to presentation
    layers; ``to_dict`` is its canonical serialization.
    """

    metadata: GraphMetadata
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)
    clusters: List[Cluster] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)

    def node(self, node_id: str) -> Optional[GraphNode]:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "clusters": [c.to_dict() for c in self.clusters],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    def to_store(self) -> "GraphStore":
        from apimesh.graph.graph_store import GraphStore

        store = GraphStore()
        for n in self.nodes:
            store.add_node(n)
        for e in self.edges:
            store.add_edge(e)
        store.metadata.update(self.metadata.to_dict())
        return store
