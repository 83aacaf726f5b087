"""
Lark-backed grammar engine for SATySFi documents.

The parser runs Lark's LALR algorithm with the contextual lexer. Comments are
declared as ignored terminals, so a lexer callback collects them while the
text is tokenized and they are spliced back into the resulting tree as leaves
of the innermost node that encloses them.
"""

import logging
import threading
from functools import lru_cache
from typing import List, Optional, Sequence

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from .engine import EnginePosition, EngineSpan, GrammarEngine, GrammarSyntaxError, ParseNode
from .satysfi_grammar import SATYSFI_GRAMMAR, START_RULES, TERMINAL_RULES

logger = logging.getLogger(__name__)


def _token_span(token: Token) -> EngineSpan:
    return EngineSpan(
        start=EnginePosition(token.start_pos, token.line, token.column),
        end=EnginePosition(token.end_pos, token.end_line, token.end_column),
    )


def _tree_span(tree: Tree, fallback: EnginePosition) -> EngineSpan:
    meta = tree.meta
    if getattr(meta, "empty", True):
        # Rules that matched nothing carry no positions; pin them in place.
        return EngineSpan(start=fallback, end=fallback)
    return EngineSpan(
        start=EnginePosition(meta.start_pos, meta.line, meta.column),
        end=EnginePosition(meta.end_pos, meta.end_line, meta.end_column),
    )


def _document_span(text: str) -> EngineSpan:
    """Span from the first to the last character of text."""
    line_count = text.count("\n")
    last_line_start = text.rfind("\n") + 1
    end = EnginePosition(len(text), line_count + 1, len(text) - last_line_start + 1)
    return EngineSpan(start=EnginePosition(0, 1, 1), end=end)


class LarkParseNode(ParseNode):
    """ParseNode view over a Lark ``Tree`` or ``Token``."""

    def __init__(self, item, span: EngineSpan):
        self._item = item
        self._span = span
        self._children: Optional[List["LarkParseNode"]] = None

    @property
    def rule(self) -> str:
        if isinstance(self._item, Token):
            return TERMINAL_RULES.get(self._item.type, self._item.type.lower())
        return str(self._item.data)

    @property
    def span(self) -> EngineSpan:
        return self._span

    def children(self) -> List["LarkParseNode"]:
        if self._children is None:
            self._children = self._build_children()
        return self._children

    def _build_children(self) -> List["LarkParseNode"]:
        if isinstance(self._item, Token):
            return []

        nodes = []
        cursor = self._span.start
        for child in self._item.children:
            if isinstance(child, Token):
                span = _token_span(child)
            else:
                span = _tree_span(child, cursor)
            nodes.append(LarkParseNode(child, span))
            cursor = span.end
        return nodes

    def attach_comment(self, comment: "LarkParseNode") -> None:
        """
        Insert a comment leaf under the innermost node enclosing it.

        Args:
            comment: Leaf node wrapping a COMMENT token
        """
        node = self
        start = comment.span.start.offset
        end = comment.span.end.offset
        while True:
            siblings = node.children()
            enclosing = None
            for child in siblings:
                if child.span.start.offset <= start and end <= child.span.end.offset:
                    enclosing = child
                    break
            if enclosing is None or isinstance(enclosing._item, Token):
                break
            node = enclosing

        index = len(siblings)
        for i, child in enumerate(siblings):
            if child.span.start.offset >= start:
                index = i
                break
        siblings.insert(index, comment)


class LarkGrammarEngine(GrammarEngine):
    """
    Grammar engine implemented with a Lark LALR parser.

    A single instance is safe to share between threads: the comments seen by
    the lexer callback are collected in thread-local storage.
    """

    def __init__(self, start_rules: Sequence[str] = START_RULES):
        self._start_rules = tuple(start_rules)
        self._local = threading.local()
        self._parser = Lark(
            SATYSFI_GRAMMAR,
            parser="lalr",
            lexer="contextual",
            start=list(self._start_rules),
            propagate_positions=True,
            maybe_placeholders=False,
            lexer_callbacks={"COMMENT": self._collect_comment},
        )
        logger.debug("Lark grammar compiled for start rules %s", ", ".join(self._start_rules))

    @property
    def start_rules(self) -> Sequence[str]:
        return self._start_rules

    def _collect_comment(self, token: Token) -> Token:
        comments = getattr(self._local, "comments", None)
        if comments is not None:
            comments.append(token)
        return token

    def parse(self, rule: str, text: str) -> ParseNode:
        """
        Parse text starting from the given rule.

        Args:
            rule: One of the configured start rules
            text: Source text

        Returns:
            Root LarkParseNode spanning the whole text

        Raises:
            ValueError: If rule is not a configured start rule
            GrammarSyntaxError: If the text does not match the rule
        """
        if rule not in self._start_rules:
            raise ValueError(f"Unknown start rule: {rule}")

        self._local.comments = []
        try:
            tree = self._parser.parse(text, start=rule)
            comments = list(self._local.comments)
        except UnexpectedInput as e:
            raise GrammarSyntaxError(str(e).strip(), _error_location(e)) from e
        finally:
            self._local.comments = None

        root = LarkParseNode(tree, _document_span(text))
        for token in comments:
            root.attach_comment(LarkParseNode(token, _token_span(token)))
        return root


def _error_location(error: UnexpectedInput) -> Optional[EnginePosition]:
    line = getattr(error, "line", -1)
    column = getattr(error, "column", -1)
    if not isinstance(line, int) or not isinstance(column, int) or line < 1 or column < 1:
        return None
    offset = getattr(error, "pos_in_stream", None)
    return EnginePosition(offset if isinstance(offset, int) else 0, line, column)


@lru_cache(maxsize=1)
def get_default_engine() -> LarkGrammarEngine:
    """Return the process-wide engine; compiling the grammar happens once."""
    return LarkGrammarEngine()
