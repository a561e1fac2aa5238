import itertools

import pytest

from apimesh.config.settings import GraphConfig
from apimesh.descriptors import ServiceDescriptor
from apimesh.embeddings import EmbeddingEngine, SimilarityComputer
from apimesh.errors import DimensionMismatch
from apimesh.graph import (
    ClusterKind,
    EdgeKind,
    GraphQueryEngine,
    Priority,
    SemanticGraphBuilder,
)

from conftest import make_vector


def _fixture_vectors():
    # a, b, c sit close together and share "chat"; d is orthogonal to all
    return [
        make_vector("a", [1.0, 0.0, 0.0], type="ai", capabilities=("chat", "embeddings")),
        make_vector("b", [1.0, 0.1, 0.0], type="ai", capabilities=("chat",)),
        make_vector("c", [1.0, 0.0, 0.1], type="storage", capabilities=("chat", "blob")),
        make_vector("d", [0.0, 1.0, 0.0], type="version-control", capabilities=("chat",)),
    ]


def _without_timestamp(doc):
    doc = dict(doc)
    doc["metadata"] = {k: v for k, v in doc["metadata"].items() if k != "generated_at"}
    return doc


def test_nodes_mirror_vectors_in_order():
    graph = SemanticGraphBuilder().build(_fixture_vectors())

    assert [n.id for n in graph.nodes] == ["a", "b", "c", "d"]
    assert graph.node("c").type == "storage"
    assert graph.node("c").capabilities == ("chat", "blob")
    assert graph.node("zzz") is None
    assert graph.metadata.total_apis == 4
    assert graph.metadata.total_connections == len(graph.edges)


def test_edges_are_threshold_gated_with_kinds():
    graph = SemanticGraphBuilder().build(_fixture_vectors())

    pairs = [(e.source, e.target) for e in graph.edges]
    assert pairs == [("a", "b"), ("a", "c"), ("b", "c")]

    kinds = {(e.source, e.target): e.kind for e in graph.edges}
    assert kinds[("a", "b")] is EdgeKind.SAME_TYPE
    assert kinds[("a", "c")] is EdgeKind.COMPLEMENTARY
    assert kinds[("b", "c")] is EdgeKind.COMPLEMENTARY

    for e in graph.edges:
        assert e.shared_capabilities == ("chat",)


def test_edge_set_respects_threshold_and_has_no_self_loops(descriptors, provider):
    vectors = EmbeddingEngine(provider).generate_embeddings(descriptors)
    graph = SemanticGraphBuilder().build(vectors)

    edge_pairs = {(e.source, e.target) for e in graph.edges}
    for e in graph.edges:
        assert e.source != e.target
        assert e.weight > 0.3

    for a, b in itertools.combinations(vectors, 2):
        if (a.api_id, b.api_id) not in edge_pairs:
            assert SimilarityComputer.cosine(a.vector, b.vector) <= 0.3


def test_custom_threshold_prunes_more_edges():
    vectors = _fixture_vectors()
    strict = SemanticGraphBuilder(GraphConfig(edge_threshold=0.995)).build(vectors)
    assert [(e.source, e.target) for e in strict.edges] == [("a", "b"), ("a", "c")]


def test_edge_kind_rules():
    builder = SemanticGraphBuilder()
    assert builder.edge_kind("ai", "ai") is EdgeKind.SAME_TYPE
    assert builder.edge_kind("version-control", "ai") is EdgeKind.COMPLEMENTARY
    assert builder.edge_kind("ci-cd", "version-control") is EdgeKind.COMPLEMENTARY
    assert builder.edge_kind("ai", "ci-cd") is EdgeKind.CROSS_TYPE


def test_same_type_ai_pair_shares_text_generation(provider):
    a = ServiceDescriptor.create(
        id="A",
        name="Alpha",
        type="ai",
        description="Language model API",
        capabilities=["text-generation", "embeddings"],
    )
    b = ServiceDescriptor.create(
        id="B",
        name="Bravo",
        type="ai",
        description="Language model API",
        capabilities=["text-generation", "classification"],
    )
    vectors = EmbeddingEngine(provider).generate_embeddings([a, b])
    assert SimilarityComputer.cosine(vectors[0].vector, vectors[1].vector) > 0.3

    graph = SemanticGraphBuilder().build(vectors)

    assert len(graph.edges) == 1
    edge = graph.edges[0]
    assert edge.kind is EdgeKind.SAME_TYPE
    assert edge.shared_capabilities == ("text-generation",)


def test_clusters_skip_singletons():
    graph = SemanticGraphBuilder().build(_fixture_vectors())

    ids = [c.id for c in graph.clusters]
    assert ids == ["cluster-ai", "cluster-capability-chat"]
    for c in graph.clusters:
        assert len(c.members) >= 2

    type_cluster, cap_cluster = graph.clusters
    assert type_cluster.kind is ClusterKind.TYPE
    assert type_cluster.name == "Ai APIs"
    assert type_cluster.members == ("a", "b")
    assert cap_cluster.kind is ClusterKind.CAPABILITY
    assert cap_cluster.name == "chat Providers"
    assert cap_cluster.members == ("a", "b", "c", "d")


def test_recommendations_in_emission_order():
    graph = SemanticGraphBuilder().build(_fixture_vectors())
    recs = graph.recommendations

    assert [r.type for r in recs] == [
        "high-similarity",
        "high-similarity",
        "high-similarity",
        "capability-cluster",
    ]
    assert [r.affected_apis for r in recs[:3]] == [("a", "b"), ("a", "c"), ("b", "c")]
    assert all(r.priority is Priority.HIGH for r in recs[:3])

    saturation = recs[3]
    assert saturation.priority is Priority.MEDIUM
    assert saturation.affected_apis == ("a", "b", "c")
    assert saturation.title == "Multiple chat Providers"
    assert saturation.description == "3 APIs provide chat capability"


def test_capability_rule_needs_more_than_two_participants():
    vectors = _fixture_vectors()[:2]
    graph = SemanticGraphBuilder().build(vectors)
    assert [r.type for r in graph.recommendations] == ["high-similarity"]


def test_build_is_deterministic(descriptors, provider):
    vectors = EmbeddingEngine(provider).generate_embeddings(descriptors)
    first = SemanticGraphBuilder().build(vectors).to_dict()
    second = SemanticGraphBuilder().build(vectors).to_dict()
    assert _without_timestamp(first) == _without_timestamp(second)


def test_build_rejects_mixed_dimensions():
    vectors = [make_vector("a", [1.0, 0.0]), make_vector("b", [1.0, 0.0, 0.0])]
    with pytest.raises(DimensionMismatch):
        SemanticGraphBuilder().build(vectors)


def test_empty_input_gives_empty_graph():
    graph = SemanticGraphBuilder().build([])
    assert graph.nodes == []
    assert graph.edges == []
    assert graph.clusters == []
    assert graph.recommendations == []


def test_to_dict_uses_presentation_field_names():
    doc = SemanticGraphBuilder().build(_fixture_vectors()).to_dict()

    assert set(doc) == {"metadata", "nodes", "edges", "clusters", "recommendations"}
    edge = doc["edges"][0]
    assert edge["from"] == "a" and edge["to"] == "b"
    assert edge["type"] == "same-type"
    assert doc["clusters"][0]["type"] == "type-based"
    assert doc["recommendations"][0]["priority"] == "high"


def test_store_and_query_engine():
    graph = SemanticGraphBuilder().build(_fixture_vectors())
    store = graph.to_store()
    engine = GraphQueryEngine(store)

    assert store.node_count() == 4
    assert store.edge_count() == 3
    assert store.has_edge("b", "a")
    assert [n.id for n in store.get_nodes()] == ["a", "b", "c", "d"]
    assert store.get_node("d").type == "version-control"
    assert len(store.get_edges()) == 3
    assert sorted(map(len, store.connected_components())) == [1, 3]

    neighbors = engine.neighbors("a")
    assert {n for n, _ in neighbors} == {"b", "c"}
    assert neighbors[0][1] >= neighbors[1][1]

    assert engine.route("b", "c") == ["b", "c"]
    assert engine.route("a", "d") == []
    assert engine.route("a", "missing") == []

    sub = engine.k_hop_subgraph(start="d", k=2)
    assert sub.nodes == {"d"}
    assert sub.edges == []

    sub = engine.k_hop_subgraph(start="a", k=1)
    assert sub.nodes == {"a", "b", "c"}
    assert len(sub.edges) == 2
