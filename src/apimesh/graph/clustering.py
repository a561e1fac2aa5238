from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Sequence

from apimesh.graph.graph_schema import Cluster, ClusterKind, GraphNode


def _group(
    nodes: Iterable[GraphNode],
    keys: Callable[[GraphNode], Iterable[str]],
) -> Dict[str, List[str]]:
    # dicts keep first-seen key order, which keeps output stable
    groups: Dict[str, List[str]] = {}
    for node in nodes:
        for key in keys(node):
            members = groups.setdefault(key, [])
            if node.id not in members:
                members.append(node.id)
    return groups


class ClusterDetector:
    """
    Two independent covers over the node set: by category and by
    capability. A node may sit in one type cluster and several
    capability clusters at once.
    """

    def __init__(self, *, min_size: int = 2) -> None:
        self.min_size = min_size

    def detect(self, nodes: Sequence[GraphNode]) -> List[Cluster]:
        return self.type_clusters(nodes) + self.capability_clusters(nodes)

    def type_clusters(self, nodes: Sequence[GraphNode]) -> List[Cluster]:
        groups = _group(nodes, lambda n: [n.type])
        return [
            Cluster(
                id=f"cluster-{type_}",
                name=f"{type_[:1].upper()}{type_[1:]} APIs",
                kind=ClusterKind.TYPE,
                members=tuple(members),
                description=f"APIs of type: {type_}",
            )
            for type_, members in groups.items()
            if len(members) >= self.min_size
        ]

    def capability_clusters(self, nodes: Sequence[GraphNode]) -> List[Cluster]:
        groups = _group(nodes, lambda n: n.capabilities)
        return [
            Cluster(
                id=f"cluster-capability-{capability}",
                name=f"{capability} Providers",
                kind=ClusterKind.CAPABILITY,
                members=tuple(members),
                description=f"APIs providing {capability} capability",
            )
            for capability, members in groups.items()
            if len(members) >= self.min_size
        ]
