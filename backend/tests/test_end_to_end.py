import pytest

from apimesh.graph import EdgeKind
from apimesh.orchestration import FlowStatus


@pytest.mark.asyncio
async def test_catalog_pipeline_end_to_end(service):
    """
    Descriptors -> embeddings -> graph, then a suggested flow
    executed against the stub handlers.
    """
    graph = service.refresh()

    assert graph.metadata.total_apis == 6
    assert {n.id for n in graph.nodes} == {d.id for d in service.descriptors()}

    type_clusters = {c.id: c.members for c in graph.clusters if c.kind.value == "type-based"}
    assert set(type_clusters["cluster-ai"]) == {"openai", "hugging-face", "cohere", "anthropic"}
    assert set(type_clusters["cluster-version-control"]) == {"github", "gitlab"}

    for edge in graph.edges:
        a = graph.node(edge.source)
        b = graph.node(edge.target)
        if a.type == b.type:
            assert edge.kind is EdgeKind.SAME_TYPE
        else:
            assert edge.kind is EdgeKind.COMPLEMENTARY

    flow = service.orchestrator.suggest_orchestration("turn this content into a stored report")
    assert [s.api_id for s in flow.steps] == ["openai", "github"]

    await service.orchestrator.execute_flow(flow.id)

    assert flow.status is FlowStatus.COMPLETED
    assert len(flow.results) == 2
