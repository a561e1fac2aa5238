from __future__ import annotations

import networkx as nx
from typing import Iterable, List, Dict, Any

from apimesh.graph.graph_schema import GraphNode, GraphEdge


class GraphStore:
    """
    In-memory undirected view of a semantic graph.

    Used for traversal queries; the ``SemanticGraph`` document stays
    the authoritative, ordered output.
    """

    def __init__(self) -> None:
        self._graph = nx.Graph()
        self.metadata: Dict[str, Any] = {}

    # -------------------- Nodes --------------------

    def add_node(self, node: GraphNode) -> None:
        self._graph.add_node(node.id, data=node)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._graph

    def get_node(self, node_id: str) -> GraphNode:
        return self._graph.nodes[node_id]["data"]

    def get_nodes(self) -> List[GraphNode]:
        return [data["data"] for _, data in self._graph.nodes(data=True)]

    # -------------------- Edges --------------------

    def add_edge(self, edge: GraphEdge) -> None:
        self._graph.add_edge(edge.source, edge.target, data=edge, weight=edge.weight)

    def get_edge(self, a: str, b: str) -> GraphEdge:
        return self._graph.edges[a, b]["data"]

    def has_edge(self, a: str, b: str) -> bool:
        return self._graph.has_edge(a, b)

    def edges(self) -> Iterable[GraphEdge]:
        for _, _, data in self._graph.edges(data=True):
            yield data["data"]

    def get_edges(self) -> List[GraphEdge]:
        return list(self.edges())

    # -------------------- Traversal --------------------

    def neighbors(self, node_id: str) -> List[str]:
        if node_id not in self._graph:
            return []
        return list(self._graph.neighbors(node_id))

    def shortest_path(self, source: str, target: str) -> List[str]:
        """
        Fewest-hop path, or an empty list when none exists.
        """
        try:
            return list(nx.shortest_path(self._graph, source, target))
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return []

    # -------------------- Analytics --------------------

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def connected_components(self) -> List[List[str]]:
        return [sorted(c) for c in nx.connected_components(self._graph)]
