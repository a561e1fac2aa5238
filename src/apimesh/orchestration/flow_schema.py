from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union
from uuid import uuid4

from apimesh.errors import InvalidTransition, UnknownAction


class FlowStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


_TRANSITIONS: Dict[FlowStatus, FrozenSet[FlowStatus]] = {
    FlowStatus.PENDING: frozenset({FlowStatus.RUNNING}),
    FlowStatus.RUNNING: frozenset({FlowStatus.COMPLETED, FlowStatus.FAILED}),
    FlowStatus.COMPLETED: frozenset(),
    FlowStatus.FAILED: frozenset(),
}


class StepAction(str, Enum):
    AUTHENTICATE = "authenticate"
    QUERY = "query"
    TRANSFORM = "transform"
    FORWARD = "forward"

    @classmethod
    def parse(cls, value: Union["StepAction", str]) -> "StepAction":
        """
        Strict conversion; raises UnknownAction for anything outside the set.
        """
        try:
            return cls(value)
        except ValueError:
            raise UnknownAction(str(value)) from None

    @classmethod
    def coerce(cls, value: Union["StepAction", str]) -> Union["StepAction", str]:
        """
        Lenient conversion for dynamic inputs: unknown tags are kept as
        plain strings and rejected at dispatch time.
        """
        try:
            return cls(value)
        except ValueError:
            return str(value)


@dataclass
class OrchestrationStep:
    id: str
    action: Union[StepAction, str]
    api_id: str
    payload: Dict[str, Any]
    order: int

    @staticmethod
    def create(
        *,
        action: Union[StepAction, str],
        api_id: str,
        payload: Optional[Dict[str, Any]] = None,
        order: int = 0,
    ) -> "OrchestrationStep":
        return OrchestrationStep(
            id=f"step-{uuid4().hex}",
            action=StepAction.coerce(action),
            api_id=api_id,
            payload=dict(payload or {}),
            order=order,
        )

    @property
    def action_name(self) -> str:
        if isinstance(self.action, StepAction):
            return self.action.value
        return self.action

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "action": self.action_name,
            "api_id": self.api_id,
            "payload": self.payload,
            "order": self.order,
        }


@dataclass
class OrchestrationFlow:
    """
    Mutable flow aggregate.

    Only the orchestration engine mutates flows; callers read them.
    """

    id: str
    name: str
    api_ids: List[str]
    steps: List[OrchestrationStep] = field(default_factory=list)
    status: FlowStatus = FlowStatus.PENDING
    results: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @staticmethod
    def create(name: str, api_ids: List[str]) -> "OrchestrationFlow":
        return OrchestrationFlow(
            id=f"flow-{uuid4().hex}",
            name=name,
            api_ids=list(api_ids),
        )

    def transition(self, status: FlowStatus) -> None:
        if status not in _TRANSITIONS[self.status]:
            raise InvalidTransition(self.id, self.status.value, status.value)
        self.status = status

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "apis": list(self.api_ids),
            "steps": [s.to_dict() for s in self.steps],
            "status": self.status.value,
            "results": dict(self.results),
            "error": self.error,
        }
