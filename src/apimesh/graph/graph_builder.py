from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import logging

from apimesh.config.settings import GraphConfig
from apimesh.embeddings.encoder import EmbeddingVector
from apimesh.embeddings.similarity import SimilarityComputer, SimilarityRecord
from apimesh.errors import DimensionMismatch
from apimesh.graph.clustering import ClusterDetector
from apimesh.graph.graph_schema import (
    EdgeKind,
    GraphEdge,
    GraphMetadata,
    GraphNode,
    SemanticGraph,
)
from apimesh.graph.recommendations import RecommendationSynthesizer
from apimesh.utils.time import iso_timestamp

logger = logging.getLogger("apimesh.graph")


class SemanticGraphBuilder:
    """
    Constructs the semantic graph from a set of embeddings.

    Construction is synchronous and order-stable: for the same input
    sequence, nodes, edges, clusters and recommendations come out in
    the same order every time. Only ``metadata.generated_at`` varies.
    """

    def __init__(self, config: Optional[GraphConfig] = None) -> None:
        self.config = config or GraphConfig()
        self.clusters = ClusterDetector(min_size=self.config.min_cluster_size)
        self.recommender = RecommendationSynthesizer(self.config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, vectors: Sequence[EmbeddingVector]) -> SemanticGraph:
        self._check_dimensions(vectors)

        nodes = [GraphNode.from_vector(v) for v in vectors]
        edges, records = self.connect(vectors)
        clusters = self.clusters.detect(nodes)
        recommendations = self.recommender.synthesize(records)

        logger.info(
            "built semantic graph: nodes=%d edges=%d clusters=%d recommendations=%d",
            len(nodes),
            len(edges),
            len(clusters),
            len(recommendations),
        )

        return SemanticGraph(
            metadata=GraphMetadata(
                generated_at=iso_timestamp(),
                total_apis=len(nodes),
                total_connections=len(edges),
            ),
            nodes=nodes,
            edges=edges,
            clusters=clusters,
            recommendations=recommendations,
        )

    def connect(
        self,
        vectors: Sequence[EmbeddingVector],
    ) -> Tuple[List[GraphEdge], List[SimilarityRecord]]:
        """
        Score every unordered pair (i < j) and keep those strictly above
        the edge threshold.
        """
        edges: List[GraphEdge] = []
        records: List[SimilarityRecord] = []

        for i, a in enumerate(vectors):
            for b in vectors[i + 1:]:
                if a.api_id == b.api_id:
                    continue

                record = SimilarityComputer.compare(a, b)
                if record.score <= self.config.edge_threshold:
                    continue

                records.append(record)
                edges.append(
                    GraphEdge(
                        source=a.api_id,
                        target=b.api_id,
                        weight=record.score,
                        kind=self.edge_kind(a.type, b.type),
                        shared_capabilities=record.shared_capabilities,
                    )
                )

        return edges, records

    def edge_kind(self, type_a: str, type_b: str) -> EdgeKind:
        if type_a == type_b:
            return EdgeKind.SAME_TYPE

        for pair in self.config.complementary_pairs:
            if type_a in pair and type_b in pair:
                return EdgeKind.COMPLEMENTARY

        return EdgeKind.CROSS_TYPE

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _check_dimensions(vectors: Sequence[EmbeddingVector]) -> None:
        if not vectors:
            return
        expected = vectors[0].dimension
        for v in vectors[1:]:
            if v.dimension != expected:
                raise DimensionMismatch(expected, v.dimension)
