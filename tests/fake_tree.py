"""Hand-built parse trees for exercising the syntax layer without a parser."""
from typing import Callable, List, Optional

from satysfi_index_mcp.grammar.engine import (
    EnginePosition,
    EngineSpan,
    GrammarEngine,
    GrammarSyntaxError,
    ParseNode,
)
from satysfi_index_mcp.syntax.position import Position


def engine_position(text: str, offset: int) -> EnginePosition:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return EnginePosition(offset, line, column)


def cursor(text: str, needle: str, delta: int = 0, after: int = 0) -> Position:
    """Cursor at the first occurrence of needle (from offset after), shifted by delta."""
    offset = text.index(needle, after) + delta
    line = text.count("\n", 0, offset)
    character = offset - (text.rfind("\n", 0, offset) + 1)
    return Position(line, character, offset)


class FakeParseNode(ParseNode):
    def __init__(self, rule: str, span: EngineSpan, children=()):
        self._rule = rule
        self._span = span
        self._children = list(children)

    @property
    def rule(self) -> str:
        return self._rule

    @property
    def span(self) -> EngineSpan:
        return self._span

    def children(self) -> List[ParseNode]:
        return list(self._children)


class TreeBuilder:
    """Builds FakeParseNode trees whose spans are located by searching the text."""

    def __init__(self, text: str):
        self.text = text

    def span(self, start: int, end: int) -> EngineSpan:
        return EngineSpan(engine_position(self.text, start), engine_position(self.text, end))

    def find(self, needle: str, after: int = 0) -> int:
        return self.text.index(needle, after)

    def leaf(self, rule: str, needle: str, after: int = 0) -> FakeParseNode:
        start = self.find(needle, after)
        return FakeParseNode(rule, self.span(start, start + len(needle)))

    def node(self, rule: str, *children: FakeParseNode, start: Optional[int] = None,
             end: Optional[int] = None) -> FakeParseNode:
        if start is None:
            start = children[0].span.start.offset
        if end is None:
            end = children[-1].span.end.offset
        return FakeParseNode(rule, self.span(start, end), children)

    def root(self, *children: FakeParseNode) -> FakeParseNode:
        return self.node("program", *children, start=0, end=len(self.text))


class FakeEngine(GrammarEngine):
    """Engine returning prepared trees, or raising a prepared error."""

    def __init__(self, build: Optional[Callable[[str], ParseNode]] = None,
                 error: Optional[GrammarSyntaxError] = None):
        self.build = build
        self.error = error
        self.calls = []

    def parse(self, rule: str, text: str) -> ParseNode:
        self.calls.append((rule, text))
        if self.error is not None:
            raise self.error
        return self.build(text)
