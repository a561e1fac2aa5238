"""
Orchestration subsystem for apimesh.

Flows are ordered, stateful step sequences targeting APIs:

    pending -> running -> completed | failed

Steps dispatch through a closed set of actions
(authenticate, query, transform, forward).
"""

from apimesh.orchestration.flow_schema import (
    FlowStatus,
    StepAction,
    OrchestrationStep,
    OrchestrationFlow,
)
from apimesh.orchestration.registry import FlowRegistry
from apimesh.orchestration.handlers import StepDispatcher, StepHandler, DEFAULT_HANDLERS
from apimesh.orchestration.engine import OrchestrationEngine

__all__ = [
    "FlowStatus",
    "StepAction",
    "OrchestrationStep",
    "OrchestrationFlow",
    "FlowRegistry",
    "StepDispatcher",
    "StepHandler",
    "DEFAULT_HANDLERS",
    "OrchestrationEngine",
]
