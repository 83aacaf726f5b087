"""
Grammar engine interface.

The analysis layer never talks to a concrete parser directly. A grammar
engine takes a start rule and the document text and either returns a parse
tree made of ``ParseNode`` objects or raises ``GrammarSyntaxError``.
Parse nodes may borrow from the engine's own tree objects; the syntax layer
copies them into owned ``SyntaxNode`` trees exactly once.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class EnginePosition:
    """A position as the grammar engine reports it.

    ``offset`` is a character index into the parsed text; ``line`` and
    ``column`` are 1-based.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True)
class EngineSpan:
    """Covering span of a parse node (end is exclusive in offset terms)."""

    start: EnginePosition
    end: EnginePosition


class GrammarSyntaxError(Exception):
    """Raised when the grammar engine rejects the input text."""

    def __init__(self, message: str, location: Optional[EnginePosition] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def to_dict(self) -> dict:
        result = {"message": self.message}
        if self.location is not None:
            result["line"] = self.location.line - 1
            result["character"] = self.location.column - 1
        return result


class ParseNode(ABC):
    """A node of the engine's parse tree."""

    @property
    @abstractmethod
    def rule(self) -> str:
        """Rule identifier of the match."""
        pass

    @property
    @abstractmethod
    def span(self) -> EngineSpan:
        """Source span covered by the match."""
        pass

    @abstractmethod
    def children(self) -> List["ParseNode"]:
        """Direct children in left-to-right source order."""
        pass


class GrammarEngine(ABC):
    """Abstract base class for grammar engines."""

    @abstractmethod
    def parse(self, rule: str, text: str) -> ParseNode:
        """
        Parse text starting from the given rule.

        Args:
            rule: Start rule identifier
            text: Source text

        Returns:
            Root ParseNode of the match

        Raises:
            GrammarSyntaxError: If the text does not match the rule
        """
        pass
