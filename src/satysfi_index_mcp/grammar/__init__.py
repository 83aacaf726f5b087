"""
Grammar engines for SATySFi source text.

- engine: the engine-neutral interface (ParseNode, GrammarEngine, errors)
- lark_engine: the Lark LALR implementation used by default
"""

from .engine import EnginePosition, EngineSpan, GrammarEngine, GrammarSyntaxError, ParseNode
from .lark_engine import LarkGrammarEngine, LarkParseNode, get_default_engine
from .satysfi_grammar import START_RULES

__all__ = [
    "EnginePosition",
    "EngineSpan",
    "GrammarEngine",
    "GrammarSyntaxError",
    "ParseNode",
    "LarkGrammarEngine",
    "LarkParseNode",
    "get_default_engine",
    "START_RULES",
]
