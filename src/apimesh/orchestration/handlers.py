from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional
import json

from apimesh.errors import UnknownAction
from apimesh.orchestration.flow_schema import OrchestrationStep, StepAction

StepHandler = Callable[[str, Dict[str, Any]], Awaitable[Any]]


# ---------------------------------------------------------------------
# Stub handlers (no network I/O)
# ---------------------------------------------------------------------


async def authenticate(api_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "success": True,
        "message": f"API {api_id} authenticated successfully",
        "token": "stub-auth-token",
    }


async def query(api_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "success": True,
        "data": f"Stub response from API {api_id}",
        "query": payload.get("query", "default query"),
    }


async def transform(api_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    original = payload.get("input")
    return {
        "success": True,
        "original_data": original,
        "transformed_data": f"Transformed: {json.dumps(original, default=str)}",
        "transformation_type": payload.get("type", "default"),
    }


async def forward(api_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "success": True,
        "message": f"Data forwarded to API {api_id}",
        "data_size": len(json.dumps(payload.get("data") or {}, default=str)),
    }


DEFAULT_HANDLERS: Dict[StepAction, StepHandler] = {
    StepAction.AUTHENTICATE: authenticate,
    StepAction.QUERY: query,
    StepAction.TRANSFORM: transform,
    StepAction.FORWARD: forward,
}


class StepDispatcher:
    """
    Enum-keyed dispatch table from step action to handler.

    Handlers supplied by the host override the stubs per action.
    """

    def __init__(self, handlers: Optional[Mapping[StepAction, StepHandler]] = None) -> None:
        self._handlers: Dict[StepAction, StepHandler] = dict(DEFAULT_HANDLERS)
        if handlers:
            for action, handler in handlers.items():
                self._handlers[StepAction.parse(action)] = handler

    async def dispatch(self, step: OrchestrationStep) -> Any:
        if not isinstance(step.action, StepAction):
            raise UnknownAction(str(step.action), step_id=step.id)
        handler = self._handlers[step.action]
        return await handler(step.api_id, step.payload)
