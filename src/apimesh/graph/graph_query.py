from __future__ import annotations

from dataclasses import dataclass
from typing import Set, List, Tuple

from apimesh.graph.graph_store import GraphStore
from apimesh.graph.graph_schema import GraphEdge


@dataclass(frozen=True)
class SubgraphResult:
    """
    Result of a bounded graph traversal.
    """

    nodes: Set[str]
    edges: List[GraphEdge]


class GraphQueryEngine:
    """
    Read-only traversal over a semantic graph.

    ``route`` is the multi-hop counterpart of the orchestration
    engine's single-bridge heuristic.
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def neighbors(self, node_id: str, *, min_weight: float = 0.0) -> List[Tuple[str, float]]:
        """
        Adjacent nodes with their edge weight, strongest first.
        """
        scored = [
            (nbr, self.store.get_edge(node_id, nbr).weight)
            for nbr in self.store.neighbors(node_id)
        ]
        scored = [(nbr, w) for nbr, w in scored if w >= min_weight]
        return sorted(scored, key=lambda x: x[1], reverse=True)

    def k_hop_subgraph(
        self,
        *,
        start: str,
        k: int,
        min_weight: float = 0.0,
    ) -> SubgraphResult:

        visited_nodes: Set[str] = set()
        collected_edges: dict[Tuple[str, str], GraphEdge] = {}

        frontier: Set[str] = {start} if self.store.has_node(start) else set()

        for _ in range(k):
            next_frontier: Set[str] = set()

            for node in frontier:
                if node in visited_nodes:
                    continue

                for nbr in self.store.neighbors(node):
                    edge = self.store.get_edge(node, nbr)
                    if edge.weight < min_weight:
                        continue

                    collected_edges[(edge.source, edge.target)] = edge
                    next_frontier.add(nbr)

                visited_nodes.add(node)

            frontier = next_frontier

        visited_nodes.update(frontier)

        return SubgraphResult(
            nodes=visited_nodes,
            edges=list(collected_edges.values()),
        )

    def route(self, source: str, target: str) -> List[str]:
        return self.store.shortest_path(source, target)
