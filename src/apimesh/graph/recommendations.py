from __future__ import annotations

from typing import Dict, List, Sequence

from apimesh.config.settings import GraphConfig
from apimesh.embeddings.similarity import SimilarityRecord
from apimesh.graph.graph_schema import Priority, Recommendation


class RecommendationSynthesizer:
    """
    Derives recommendations from the similarity records that became edges.

    Rule classes run independently and are concatenated in emission
    order: high-similarity first (edge order), then capability
    saturation (capability discovery order). No priority re-sort and no
    de-duplication across classes.
    """

    def __init__(self, config: GraphConfig) -> None:
        self.config = config

    def synthesize(self, records: Sequence[SimilarityRecord]) -> List[Recommendation]:
        return self.high_similarity(records) + self.capability_saturation(records)

    def high_similarity(self, records: Sequence[SimilarityRecord]) -> List[Recommendation]:
        threshold = self.config.high_similarity_threshold
        return [
            Recommendation(
                type="high-similarity",
                priority=Priority.HIGH,
                title="Strong Semantic Match Found",
                description=(
                    f"APIs {r.api_a} and {r.api_b} have high semantic "
                    f"similarity ({r.score * 100:.1f}%)"
                ),
                suggested_action="Consider creating a workflow that combines these APIs",
                affected_apis=(r.api_a, r.api_b),
            )
            for r in records
            if r.score > threshold
        ]

    def capability_saturation(
        self,
        records: Sequence[SimilarityRecord],
    ) -> List[Recommendation]:
        # capability -> participating ids, both levels in first-seen order
        providers: Dict[str, Dict[str, None]] = {}
        for r in records:
            for cap in r.shared_capabilities:
                members = providers.setdefault(cap, {})
                members.setdefault(r.api_a)
                members.setdefault(r.api_b)

        return [
            Recommendation(
                type="capability-cluster",
                priority=Priority.MEDIUM,
                title=f"Multiple {cap} Providers",
                description=f"{len(members)} APIs provide {cap} capability",
                suggested_action="Consider load balancing or failover strategies",
                affected_apis=tuple(members),
            )
            for cap, members in providers.items()
            if len(members) >= self.config.capability_saturation_min
        ]
