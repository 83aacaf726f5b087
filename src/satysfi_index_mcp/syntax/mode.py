"""
Syntactic mode classification.

SATySFi switches between program code, vertical and horizontal text, and
math. The mode at a cursor decides which completions make sense, so it is
derived from the chain of nodes enclosing the cursor: the innermost node
whose rule implies a mode wins.
"""

from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable

from .rules import Rule

if TYPE_CHECKING:
    from .tree import SyntaxNode


class Mode(Enum):
    """Syntactic context at a position."""

    PROGRAM = "program"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    MATH = "math"
    HEADER = "header"
    LITERAL = "literal"
    COMMENT = "comment"


# Expression arguments of commands switch back to program mode.
MODE_BY_RULE: Dict[str, Mode] = {
    Rule.VERTICAL_MODE.value: Mode.VERTICAL,
    Rule.HORIZONTAL_MODE.value: Mode.HORIZONTAL,
    Rule.MATH_MODE.value: Mode.MATH,
    Rule.HEADERS.value: Mode.HEADER,
    Rule.HEADER_STAGE.value: Mode.HEADER,
    Rule.COMMENT.value: Mode.COMMENT,
    Rule.STRING_INTERIOR.value: Mode.LITERAL,
    Rule.CMD_EXPR_ARG.value: Mode.PROGRAM,
    Rule.CMD_EXPR_OPTION.value: Mode.PROGRAM,
    Rule.MATH_CMD_EXPR_ARG.value: Mode.PROGRAM,
    Rule.MATH_CMD_EXPR_OPTION.value: Mode.PROGRAM,
}


def classify(chain: Iterable["SyntaxNode"]) -> Mode:
    """
    Determine the mode implied by a node chain.

    Args:
        chain: Nodes enclosing a position, innermost first (as from dig())

    Returns:
        The mode of the innermost recognised node, PROGRAM if none is
    """
    for node in chain:
        mode = MODE_BY_RULE.get(str(node.rule))
        if mode is not None:
            return mode
    return Mode.PROGRAM
