from __future__ import annotations

from typing import Optional


class ApimeshError(Exception):
    """
    Base class for all apimesh failures.
    """


class DimensionMismatch(ApimeshError, ValueError):
    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Embeddings must have the same dimension (got {left} and {right})"
        )


class FlowNotFound(ApimeshError, KeyError):
    def __init__(self, flow_id: str) -> None:
        self.flow_id = flow_id
        super().__init__(flow_id)

    def __str__(self) -> str:
        return f"Flow {self.flow_id} not found"


class UnknownAction(ApimeshError, ValueError):
    def __init__(self, action: str, *, step_id: Optional[str] = None) -> None:
        self.action = action
        self.step_id = step_id
        suffix = f" (step {step_id})" if step_id else ""
        super().__init__(f"Unknown action: {action}{suffix}")


class ProviderFailure(ApimeshError):
    """
    Embedding generation failed for a single descriptor.

    Batch generation drops the descriptor and keeps going.
    """

    def __init__(self, descriptor_id: str, reason: str) -> None:
        self.descriptor_id = descriptor_id
        self.reason = reason
        super().__init__(
            f"Failed to generate embedding for {descriptor_id}: {reason}"
        )


class StepFailure(ApimeshError):
    """
    A step handler raised; the owning flow has been marked failed.
    """

    def __init__(self, *, flow_id: str, step_id: str, action: str, reason: str) -> None:
        self.flow_id = flow_id
        self.step_id = step_id
        self.action = action
        self.reason = reason
        super().__init__(
            f"Flow {flow_id} failed at step {step_id} ({action}): {reason}"
        )


class InvalidTransition(ApimeshError):
    """
    Requested flow status change is not allowed by the lifecycle
    (e.g. re-executing a completed flow).
    """

    def __init__(self, flow_id: str, current: str, requested: str) -> None:
        self.flow_id = flow_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Flow {flow_id} cannot move from {current} to {requested}"
        )
