"""
Positions and ranges in document text.

Positions are zero-based ``(line, character)`` pairs, the coordinates an
editor sends with a cursor. Positions produced from a parse also carry the
character offset into the text, which is what substring extraction needs;
the offset never takes part in ordering or equality.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..grammar.engine import EnginePosition, EngineSpan


@dataclass(frozen=True, eq=False)
class Position:
    """A zero-based location in a document."""

    line: int
    character: int
    offset: int = 0

    @classmethod
    def from_engine(cls, position: EnginePosition) -> "Position":
        """Convert a 1-based engine position."""
        return cls(line=position.line - 1, character=position.column - 1, offset=position.offset)

    def _key(self):
        return (self.line, self.character)

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() >= other._key()

    def __hash__(self):
        return hash(self._key())

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class Range:
    """
    A closed interval ``[start, end]`` of positions.

    Both ends are inclusive when testing a cursor position, so a cursor
    sitting right after the last character of a token still selects it.
    """

    start: Position
    end: Position

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @classmethod
    def from_engine(cls, span: EngineSpan) -> "Range":
        return cls(start=Position.from_engine(span.start), end=Position.from_engine(span.end))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def includes(self, pos: Position) -> bool:
        """Whether pos lies within the range, inclusive at both ends."""
        return self.start <= pos <= self.end

    def contains(self, other: "Range") -> bool:
        """Whether other lies entirely within this range."""
        return self.start <= other.start and other.end <= self.end

    def is_contained_in(self, other: "Range") -> bool:
        return other.contains(self)

    def intersect(self, other: "Range") -> Optional["Range"]:
        """
        Compute the overlap of two ranges.

        Ranges that only touch at one position intersect in a zero-width
        range.

        Returns:
            The overlapping range, or None if the ranges are disjoint
        """
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if end < start:
            return None
        return Range(start=start, end=end)

    def has_intersect(self, other: "Range") -> bool:
        return self.intersect(other) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}
