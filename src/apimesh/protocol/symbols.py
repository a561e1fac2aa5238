from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional
import json
import logging

from apimesh.utils.time import iso_timestamp, utc_now

logger = logging.getLogger("apimesh.protocol")


class Symbol(str, Enum):
    ACTIVATE = "*"
    TRANSFER_KNOWLEDGE = "#"
    TRANSMIT_CONTENT = "´"
    CHAPTER_SHIFT = "CLaK:"
    REINTEGRATE = "<<RE:UNITY>>"
    SUPER = "-/-\\-"


SYMBOL_DESCRIPTIONS: Dict[Symbol, str] = {
    Symbol.ACTIVATE: "Activates and initializes API systems",
    Symbol.TRANSFER_KNOWLEDGE: "Transfers knowledge embeddings between APIs",
    Symbol.TRANSMIT_CONTENT: "Transmits raw content and payloads",
    Symbol.CHAPTER_SHIFT: "Initiates chapter shift or phase transition",
    Symbol.REINTEGRATE: "Synchronizes and reintegrates all APIs",
    Symbol.SUPER: "Super symbol: executes all protocols in sequence",
}

# Base symbols run by the super symbol, in order, with a step label.
SUPER_SEQUENCE = (
    (Symbol.ACTIVATE, "System Initialization"),
    (Symbol.TRANSFER_KNOWLEDGE, "Knowledge Transfer"),
    (Symbol.TRANSMIT_CONTENT, "Content Transmission"),
    (Symbol.CHAPTER_SHIFT, "Chapter Shift"),
    (Symbol.REINTEGRATE, "Network Reintegration"),
)


@dataclass(frozen=True)
class SymbolicResult:
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message, "data": self.data}


@dataclass
class SymbolicCommand:
    symbol: str
    payload: Dict[str, Any]
    timestamp: datetime = field(default_factory=utc_now)
    result: Optional[SymbolicResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "payload": self.payload,
            "timestamp": iso_timestamp(self.timestamp),
            "result": self.result.to_dict() if self.result else None,
        }


class SymbolicProtocolHandler:
    """
    Executes protocol symbols and keeps a command history.

    Failures never raise: unknown symbols and handler errors come back
    as ``success=False`` results and are recorded like any other call.
    Only the newest ``history_limit`` commands are kept (``None`` keeps
    all of them).
    """

    def __init__(self, history_limit: Optional[int] = 1000) -> None:
        self._history: Deque[SymbolicCommand] = deque(maxlen=history_limit)
        self._handlers: Dict[Symbol, Callable[[Dict[str, Any]], SymbolicResult]] = {
            Symbol.ACTIVATE: self._activate,
            Symbol.TRANSFER_KNOWLEDGE: self._transfer_knowledge,
            Symbol.TRANSMIT_CONTENT: self._transmit_content,
            Symbol.CHAPTER_SHIFT: self._chapter_shift,
            Symbol.REINTEGRATE: self._reintegrate,
            Symbol.SUPER: self._super,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(self, symbol: str, payload: Optional[Dict[str, Any]] = None) -> SymbolicResult:
        payload = dict(payload or {})
        command = SymbolicCommand(symbol=str(symbol), payload=payload)

        try:
            key = Symbol(symbol)
        except ValueError:
            logger.warning("unknown symbol %r", symbol)
            result = SymbolicResult(success=False, message=f"Unknown symbol: {symbol}")
        else:
            try:
                result = self._handlers[key](payload)
            except Exception as exc:
                logger.exception("symbol %s failed", key.value)
                result = SymbolicResult(
                    success=False,
                    message=f"Error executing symbol {key.value}: {exc}",
                )

        command.result = result
        self._history.append(command)
        return result

    def history(self) -> List[SymbolicCommand]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    @staticmethod
    def describe(symbol: str) -> str:
        try:
            return SYMBOL_DESCRIPTIONS[Symbol(symbol)]
        except ValueError:
            return "Unknown symbol"

    @staticmethod
    def symbols() -> List[str]:
        return [s.value for s in Symbol]

    # ------------------------------------------------------------------
    # Symbol handlers
    # ------------------------------------------------------------------

    def _super(self, payload: Dict[str, Any]) -> SymbolicResult:
        lines = []
        for symbol, label in SUPER_SEQUENCE:
            step = self.execute(symbol.value, payload)
            mark = "ok" if step.success else "failed"
            lines.append(f"{label}: {mark} {step.message}")

        return SymbolicResult(
            success=True,
            message=f"Super symbol executed with {len(SUPER_SEQUENCE)} steps:\n"
            + "\n".join(lines),
            data={"steps": lines},
        )

    @staticmethod
    def _activate(payload: Dict[str, Any]) -> SymbolicResult:
        return SymbolicResult(
            success=True,
            message="API systems activated and ready for semantic communication",
            data={"active_apis": payload.get("apis", [])},
        )

    @staticmethod
    def _transfer_knowledge(payload: Dict[str, Any]) -> SymbolicResult:
        return SymbolicResult(
            success=True,
            message="Knowledge embeddings transferred successfully across API network",
            data={
                "knowledge_packets": payload.get("knowledge", "semantic context"),
                "recipients": payload.get("recipients", "all connected APIs"),
            },
        )

    @staticmethod
    def _transmit_content(payload: Dict[str, Any]) -> SymbolicResult:
        content = payload.get("content")
        return SymbolicResult(
            success=True,
            message="Raw content transmitted to target APIs",
            data={
                "content_type": type(content).__name__,
                "size": len(json.dumps(content or {}, default=str)),
                "targets": payload.get("targets", "auto-selected APIs"),
            },
        )

    @staticmethod
    def _chapter_shift(payload: Dict[str, Any]) -> SymbolicResult:
        phase = payload.get("phase", "NextPhase")
        return SymbolicResult(
            success=True,
            message=f"Chapter shift initiated: {phase}",
            data={
                "previous_phase": payload.get("previous_phase", "InitialPhase"),
                "new_phase": phase,
                "shift_time": iso_timestamp(),
            },
        )

    @staticmethod
    def _reintegrate(payload: Dict[str, Any]) -> SymbolicResult:
        return SymbolicResult(
            success=True,
            message="All APIs synchronized and reintegrated into unified state",
            data={
                "synchronized_apis": "all active APIs",
                "unity_state": "achieved",
                "timestamp": iso_timestamp(),
            },
        )
