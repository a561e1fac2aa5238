"""
Symbolic command protocol.

A closed set of symbols, each mapped to one protocol action, plus a
super symbol that runs the base symbols in sequence.
"""

from apimesh.protocol.symbols import (
    Symbol,
    SYMBOL_DESCRIPTIONS,
    SymbolicResult,
    SymbolicCommand,
    SymbolicProtocolHandler,
)

__all__ = [
    "Symbol",
    "SYMBOL_DESCRIPTIONS",
    "SymbolicResult",
    "SymbolicCommand",
    "SymbolicProtocolHandler",
]
