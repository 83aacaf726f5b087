"""
Syntax layer: owned trees, positions, modes and symbol environments.
"""

from .environment import Environment, Symbol, SymbolKind
from .mode import Mode, classify
from .position import Position, Range
from .rules import Rule
from .tree import InvariantViolation, SyntaxNode

__all__ = [
    "Environment",
    "Symbol",
    "SymbolKind",
    "Mode",
    "classify",
    "Position",
    "Range",
    "Rule",
    "InvariantViolation",
    "SyntaxNode",
]
