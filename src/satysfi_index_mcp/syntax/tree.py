"""
Owned concrete syntax tree and position queries.

``SyntaxNode`` trees are copied once from whatever the grammar engine hands
back and are immutable afterwards. Every node records its rule identifier and
the range it covers; the text itself stays with the owning document.

Position queries:
- choose(pos): the first direct child whose range includes pos
- dig(pos): the chain of chosen descendants, innermost first
- pickup(rule): every descendant matching a rule, in document order
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, Union

from ..grammar.engine import ParseNode
from .position import Position, Range
from .rules import Rule

if TYPE_CHECKING:
    from .mode import Mode


class InvariantViolation(Exception):
    """Raised when a node's range does not fit the text it claims to cover."""


@dataclass(frozen=True)
class SyntaxNode:
    """A node of the owned syntax tree."""

    rule: str
    range: Range
    children: Tuple["SyntaxNode", ...] = ()

    @classmethod
    def from_parse_node(cls, node: ParseNode) -> "SyntaxNode":
        """
        Copy an engine parse tree into an owned tree.

        The copy is depth-first and keeps children in the order the engine
        reports them.

        Args:
            node: Root of the engine's parse tree

        Returns:
            Root of the owned tree
        """
        # Explicit stack: documents may nest deeper than the recursion limit.
        stack = [(node, iter(node.children()), [])]
        while True:
            current, pending, children = stack[-1]
            child = next(pending, None)
            if child is not None:
                stack.append((child, iter(child.children()), []))
                continue
            stack.pop()
            owned = cls(rule=current.rule, range=Range.from_engine(current.span), children=tuple(children))
            if not stack:
                return owned
            stack[-1][2].append(owned)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def choose(self, pos: Position) -> Optional["SyntaxNode"]:
        """Return the first direct child whose range includes pos."""
        for child in self.children:
            if child.range.includes(pos):
                return child
        return None

    def dig(self, pos: Position) -> List["SyntaxNode"]:
        """
        Descend towards pos through chosen children.

        Where adjacent siblings share a boundary the left one wins, since
        children are tried in source order. The node itself is not part of
        the chain.

        Args:
            pos: Cursor position

        Returns:
            Chosen nodes ordered innermost first; empty if no child of this
            node includes pos
        """
        chain = []
        node = self.choose(pos)
        while node is not None:
            chain.append(node)
            node = node.choose(pos)
        chain.reverse()
        return chain

    def pickup(self, rule: Union[str, Rule]) -> List["SyntaxNode"]:
        """Collect every descendant with the given rule in pre-order."""
        found = []
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if node.rule == rule:
                found.append(node)
            stack.extend(reversed(node.children))
        return found

    def walk(self) -> Iterator["SyntaxNode"]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> Iterator["SyntaxNode"]:
        for node in self.walk():
            if node.is_leaf:
                yield node

    def mode(self, pos: Position) -> "Mode":
        """Classify the syntactic mode at pos."""
        from .mode import classify

        return classify(self.dig(pos))

    def as_str(self, text: str) -> str:
        """
        Extract the text this node covers.

        Args:
            text: The full text the tree was built from

        Returns:
            The covered substring

        Raises:
            InvariantViolation: If the node's offsets fall outside text
        """
        start = self.range.start.offset
        end = self.range.end.offset
        if not 0 <= start <= end <= len(text):
            raise InvariantViolation(
                f"Node {self.rule} covers offsets {start}..{end} "
                f"but the text has {len(text)} characters"
            )
        return text[start:end]

    def pretty_text(self, text: str, indent: int = 0) -> str:
        """Render the tree as an indented listing, one node per line."""
        lines = []
        stack = [(self, indent)]
        while stack:
            node, depth = stack.pop()
            start, end = node.range.start, node.range.end
            location = f"({start.line}:{start.character}..{end.line}:{end.character})"
            pad = " " * depth
            if node.is_leaf:
                lines.append(f'{pad}| [{node.rule}] {location}: "{node.as_str(text)}"')
                continue
            lines.append(f"{pad}- [{node.rule}] {location}")
            stack.extend((child, depth + 2) for child in reversed(node.children))
        return "\n".join(lines)
