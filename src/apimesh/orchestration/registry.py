from __future__ import annotations

from typing import Dict, List, Optional

from apimesh.errors import FlowNotFound
from apimesh.orchestration.flow_schema import OrchestrationFlow


class FlowRegistry:
    """
    In-memory flow store owned by one orchestration context.

    Injected into the engine so that independent contexts (and tests)
    never share state. Nothing is persisted.
    """

    def __init__(self) -> None:
        self._flows: Dict[str, OrchestrationFlow] = {}

    def add(self, flow: OrchestrationFlow) -> None:
        self._flows[flow.id] = flow

    def get(self, flow_id: str) -> Optional[OrchestrationFlow]:
        return self._flows.get(flow_id)

    def require(self, flow_id: str) -> OrchestrationFlow:
        flow = self._flows.get(flow_id)
        if flow is None:
            raise FlowNotFound(flow_id)
        return flow

    def remove(self, flow_id: str) -> None:
        self._flows.pop(flow_id, None)

    def all(self) -> List[OrchestrationFlow]:
        return list(self._flows.values())

    def __contains__(self, flow_id: object) -> bool:
        return flow_id in self._flows

    def __len__(self) -> int:
        return len(self._flows)
