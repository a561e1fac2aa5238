from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class ServiceDescriptor:
    """
    Discovered capability provider.

    ``capabilities`` is semantically a set; declaration order is kept
    for display and for deterministic graph output.
    """

    id: str
    name: str
    type: str
    description: str
    endpoints: Tuple[str, ...] = ()
    capabilities: Tuple[str, ...] = ()
    source: str = "unknown"

    @staticmethod
    def create(
        *,
        id: str,
        name: str,
        type: str,
        description: str = "",
        endpoints: Iterable[str] = (),
        capabilities: Iterable[str] = (),
        source: str = "unknown",
    ) -> "ServiceDescriptor":
        return ServiceDescriptor(
            id=id,
            name=name,
            type=type,
            description=description,
            endpoints=tuple(endpoints),
            capabilities=tuple(dict.fromkeys(capabilities)),
            source=source,
        )

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "endpoints": list(self.endpoints),
            "capabilities": list(self.capabilities),
            "source": self.source,
        }
