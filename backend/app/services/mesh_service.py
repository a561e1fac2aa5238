from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
import logging
import time

from apimesh.config.settings import ApimeshConfig
from apimesh.descriptors import ServiceDescriptor
from apimesh.embeddings import EmbeddingEngine, EmbeddingProvider, SimilarityRecord
from apimesh.graph import GraphQueryEngine, SemanticGraph, SemanticGraphBuilder
from apimesh.orchestration import FlowRegistry, OrchestrationEngine, StepDispatcher
from apimesh.protocol import SymbolicProtocolHandler

logger = logging.getLogger("apimesh.service")


class MeshService:
    """
    Wires the apimesh subsystems for the HTTP layer.

    This is the ONLY place where:
    - config is interpreted
    - the descriptor set is held
    - embeddings, graph and orchestration share state
    """

    def __init__(
        self,
        *,
        descriptors: Sequence[ServiceDescriptor],
        provider: EmbeddingProvider,
        config: ApimeshConfig,
        registry: Optional[FlowRegistry] = None,
        dispatcher: Optional[StepDispatcher] = None,
    ) -> None:
        self.config = config
        self._descriptors: List[ServiceDescriptor] = list(descriptors)

        self.embeddings = EmbeddingEngine(provider)
        self.builder = SemanticGraphBuilder(config.graph)

        self.orchestrator = OrchestrationEngine(
            registry=registry or FlowRegistry(),
            descriptors=self.descriptors,
            dispatcher=dispatcher,
            config=config.orchestration,
        )

        self.protocol = SymbolicProtocolHandler(
            history_limit=config.protocol_history_limit
        )
        self._graph: Optional[SemanticGraph] = None

    # ------------------------------------------------------------------
    # Descriptors
    # ------------------------------------------------------------------

    def descriptors(self) -> List[ServiceDescriptor]:
        return list(self._descriptors)

    def replace_descriptors(self, descriptors: Sequence[ServiceDescriptor]) -> None:
        self._descriptors = list(descriptors)
        self._graph = None

    # ------------------------------------------------------------------
    # Graph
    # ------------------------------------------------------------------

    def refresh(self) -> SemanticGraph:
        t0 = time.perf_counter()
        vectors = self.embeddings.generate_embeddings(self._descriptors)
        self._graph = self.builder.build(vectors)
        logger.info("graph refresh in %.3fs", time.perf_counter() - t0)
        return self._graph

    def graph(self) -> SemanticGraph:
        if self._graph is None:
            return self.refresh()
        return self._graph

    def graph_stats(self) -> Dict[str, Any]:
        graph = self.graph()
        store = graph.to_store()
        return {
            "nodes": store.node_count(),
            "edges": store.edge_count(),
            "clusters": len(graph.clusters),
            "recommendations": len(graph.recommendations),
            "components": len(store.connected_components()),
            "metadata": graph.metadata.to_dict(),
        }

    def route(self, source_id: str, target_id: str) -> List[str]:
        return GraphQueryEngine(self.graph().to_store()).route(source_id, target_id)

    def similar(self, api_id: str, threshold: Optional[float] = None) -> List[SimilarityRecord]:
        self.graph()
        if threshold is None:
            threshold = self.config.similar_threshold
        return self.embeddings.find_similar(api_id, threshold)
