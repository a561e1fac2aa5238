from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Union
import logging

from apimesh.config.settings import OrchestrationConfig
from apimesh.descriptors.schema import ServiceDescriptor
from apimesh.errors import StepFailure, UnknownAction
from apimesh.orchestration.flow_schema import (
    FlowStatus,
    OrchestrationFlow,
    OrchestrationStep,
    StepAction,
)
from apimesh.orchestration.handlers import StepDispatcher
from apimesh.orchestration.registry import FlowRegistry
from apimesh.utils.text import contains_any

logger = logging.getLogger("apimesh.orchestration")

DescriptorSource = Callable[[], Sequence[ServiceDescriptor]]


class OrchestrationEngine:
    """
    Builds and runs ordered step sequences against APIs.

    Execution is strictly sequential and fail-fast: the first failing
    step marks the flow ``failed`` and the error propagates; later
    steps never run and nothing is rolled back.

    ``execute_flow`` reads the live step list index by index, so a step
    added behind the current position while the flow runs is executed too.
    """

    def __init__(
        self,
        *,
        registry: FlowRegistry,
        descriptors: DescriptorSource,
        dispatcher: Optional[StepDispatcher] = None,
        config: Optional[OrchestrationConfig] = None,
    ) -> None:
        self.registry = registry
        self.descriptors = descriptors
        self.dispatcher = dispatcher or StepDispatcher()
        self.config = config or OrchestrationConfig()

    # ------------------------------------------------------------------
    # Flow lifecycle
    # ------------------------------------------------------------------

    def create_flow(self, name: str, api_ids: Sequence[str] = ()) -> OrchestrationFlow:
        flow = OrchestrationFlow.create(name, list(api_ids))
        self.registry.add(flow)
        logger.info("created flow %s (%s)", flow.id, name)
        return flow

    def add_step(
        self,
        flow_id: str,
        *,
        action: Union[StepAction, str],
        api_id: str,
        payload: Optional[Dict[str, Any]] = None,
        order: int = 0,
    ) -> OrchestrationStep:
        flow = self.registry.require(flow_id)
        step = OrchestrationStep.create(
            action=action,
            api_id=api_id,
            payload=payload,
            order=order,
        )
        flow.steps.append(step)
        # list.sort is stable: equal orders keep insertion order
        flow.steps.sort(key=lambda s: s.order)
        return step

    def get_flow(self, flow_id: str) -> Optional[OrchestrationFlow]:
        return self.registry.get(flow_id)

    def active_flows(self) -> List[OrchestrationFlow]:
        return self.registry.all()

    def delete_flow(self, flow_id: str) -> None:
        self.registry.remove(flow_id)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute_flow(self, flow_id: str) -> OrchestrationFlow:
        flow = self.registry.require(flow_id)
        flow.transition(FlowStatus.RUNNING)
        logger.info("executing flow %s (%s)", flow.id, flow.name)

        index = 0
        while index < len(flow.steps):
            step = flow.steps[index]
            try:
                result = await self.dispatcher.dispatch(step)
            except UnknownAction as exc:
                self._fail(flow, step, exc)
                raise
            except Exception as exc:
                self._fail(flow, step, exc)
                raise StepFailure(
                    flow_id=flow.id,
                    step_id=step.id,
                    action=step.action_name,
                    reason=str(exc),
                ) from exc

            flow.results[step.id] = result
            logger.debug("flow %s completed step %s (%s)", flow.id, step.id, step.action_name)
            index += 1

        flow.transition(FlowStatus.COMPLETED)
        logger.info("flow %s completed (%d steps)", flow.id, len(flow.steps))
        return flow

    def _fail(self, flow: OrchestrationFlow, step: OrchestrationStep, exc: Exception) -> None:
        flow.error = str(exc)
        flow.transition(FlowStatus.FAILED)
        logger.error(
            "flow %s failed at step %s (%s): %s",
            flow.id,
            step.id,
            step.action_name,
            exc,
        )

    # ------------------------------------------------------------------
    # Heuristics
    # ------------------------------------------------------------------

    def find_optimal_route(self, source_id: str, target_id: str, capability: str) -> List[str]:
        """
        Source, at most one bridging API, target.

        The bridge is the first known descriptor (other than the
        endpoints) declaring ``capability``. This is a single-hop
        heuristic, not a path search; see ``GraphQueryEngine.route``.
        """
        route = [source_id]

        for d in self.descriptors():
            if d.id in (source_id, target_id):
                continue
            if d.has_capability(capability):
                route.append(d.id)
                break

        route.append(target_id)
        return route

    def suggest_orchestration(self, requirement: str) -> OrchestrationFlow:
        """
        Keyword-triggered two-rule template:

        - mentions of text/content add a ``query`` step (order 1) on the
          first AI descriptor
        - mentions of save/store add a ``forward`` step (order 2) on the
          first repository-capable or version-control descriptor

        Both rules are independent; matching neither yields an empty flow.
        """
        cfg = self.config
        descriptors = list(self.descriptors())
        flow = self.create_flow(
            f"Auto-generated: {requirement}",
            [d.id for d in descriptors],
        )

        if contains_any(requirement, cfg.text_keywords):
            ai = next((d for d in descriptors if d.type == cfg.ai_type), None)
            if ai is not None:
                self.add_step(
                    flow.id,
                    action=StepAction.QUERY,
                    api_id=ai.id,
                    payload={"query": requirement},
                    order=1,
                )

        if contains_any(requirement, cfg.store_keywords):
            storage = next(
                (
                    d
                    for d in descriptors
                    if d.has_capability(cfg.storage_capability)
                    or d.type == cfg.storage_type
                ),
                None,
            )
            if storage is not None:
                self.add_step(
                    flow.id,
                    action=StepAction.FORWARD,
                    api_id=storage.id,
                    payload={"data": "processed content"},
                    order=2,
                )

        return flow
