"""
Symbol environment of a document.

The environment lists every command and variable a document defines with
``let-inline``, ``let-block``, ``let-math`` and ``let``. Bindings are
collected document-wide without scope resolution: the same name may appear
several times, in document order.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .position import Range
from .rules import Rule
from .tree import SyntaxNode

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """Kinds of bindings a document can introduce."""

    INLINE_COMMAND = "inline_command"
    BLOCK_COMMAND = "block_command"
    MATH_COMMAND = "math_command"
    VARIABLE = "variable"


@dataclass(frozen=True)
class Symbol:
    """A named binding and the range of its defining token."""

    name: str
    definition_range: Range
    kind: SymbolKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "range": self.definition_range.to_dict(),
        }


@dataclass(frozen=True)
class Environment:
    """Bindings defined by a document, one ordered tuple per kind."""

    inline_cmds: Tuple[Symbol, ...] = ()
    block_cmds: Tuple[Symbol, ...] = ()
    math_cmds: Tuple[Symbol, ...] = ()
    variables: Tuple[Symbol, ...] = ()

    @classmethod
    def from_tree(cls, root: Optional[SyntaxNode], text: str) -> "Environment":
        """
        Collect the bindings defined anywhere in a tree.

        Args:
            root: Root of the document tree, or None when parsing failed
            text: The text the tree was built from

        Returns:
            The environment; empty when root is None

        Raises:
            InvariantViolation: If a name token does not fit the text
        """
        if root is None:
            return cls()

        return cls(
            inline_cmds=tuple(
                _command_bindings(root, text, Rule.LET_INLINE_STMT, Rule.INLINE_CMD_NAME,
                                  SymbolKind.INLINE_COMMAND)
            ),
            block_cmds=tuple(
                _command_bindings(root, text, Rule.LET_BLOCK_STMT, Rule.BLOCK_CMD_NAME,
                                  SymbolKind.BLOCK_COMMAND)
            ),
            math_cmds=tuple(
                _command_bindings(root, text, Rule.LET_MATH_STMT, Rule.MATH_CMD_NAME,
                                  SymbolKind.MATH_COMMAND)
            ),
            variables=tuple(_variable_bindings(root, text)),
        )

    def symbols(self, kind: SymbolKind) -> Tuple[Symbol, ...]:
        if kind is SymbolKind.INLINE_COMMAND:
            return self.inline_cmds
        if kind is SymbolKind.BLOCK_COMMAND:
            return self.block_cmds
        if kind is SymbolKind.MATH_COMMAND:
            return self.math_cmds
        return self.variables

    def latest(self, kind: SymbolKind, name: str) -> Optional[Symbol]:
        """Return the last binding of name, which is the one that wins."""
        for symbol in reversed(self.symbols(kind)):
            if symbol.name == name:
                return symbol
        return None

    def __iter__(self) -> Iterator[Symbol]:
        for kind in SymbolKind:
            yield from self.symbols(kind)

    def __len__(self) -> int:
        return len(self.inline_cmds) + len(self.block_cmds) + len(self.math_cmds) + len(self.variables)

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "inline_cmds": [symbol.to_dict() for symbol in self.inline_cmds],
            "block_cmds": [symbol.to_dict() for symbol in self.block_cmds],
            "math_cmds": [symbol.to_dict() for symbol in self.math_cmds],
            "variables": [symbol.to_dict() for symbol in self.variables],
        }


def _command_bindings(root: SyntaxNode, text: str, statement_rule: Rule,
                      name_rule: Rule, kind: SymbolKind) -> Iterator[Symbol]:
    # let-inline/let-block may take a context parameter before the name.
    for statement in root.pickup(statement_rule):
        children = statement.children
        if children and children[0].rule == name_rule:
            name_node = children[0]
        elif len(children) > 1 and children[1].rule == name_rule:
            name_node = children[1]
        else:
            logger.warning("Skipping %s without a %s at %s",
                           statement_rule.value, name_rule.value, statement.range.to_dict())
            continue
        yield Symbol(name=name_node.as_str(text), definition_range=name_node.range, kind=kind)


def _variable_bindings(root: SyntaxNode, text: str) -> Iterator[Symbol]:
    for statement in root.pickup(Rule.LET_STMT):
        if not statement.children or statement.children[0].rule != Rule.PATTERN:
            logger.warning("Skipping %s without a %s at %s",
                           Rule.LET_STMT.value, Rule.PATTERN.value, statement.range.to_dict())
            continue
        pattern = statement.children[0]
        for node in pattern.walk():
            if node.rule == Rule.VAR:
                yield Symbol(name=node.as_str(text), definition_range=node.range,
                             kind=SymbolKind.VARIABLE)
