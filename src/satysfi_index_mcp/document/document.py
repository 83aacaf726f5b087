"""
Analyzed documents.

A Document bundles the text of one buffer with its syntax tree and symbol
environment. It is built in one go from the text and never modified; an edit
produces a new Document.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..constants import PROGRAM_RULE
from ..grammar.engine import GrammarEngine, GrammarSyntaxError
from ..grammar.lark_engine import get_default_engine
from ..syntax.environment import Environment
from ..syntax.mode import Mode
from ..syntax.position import Position
from ..syntax.tree import InvariantViolation, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """
    Text of a buffer together with its analysis.

    When the text does not parse, ``root`` is None, the environment is empty
    and every position is in PROGRAM mode; ``errors`` says why.
    """

    text: str
    root: Optional[SyntaxNode] = None
    environment: Environment = field(default_factory=Environment)
    errors: Tuple[Exception, ...] = ()

    @property
    def has_tree(self) -> bool:
        return self.root is not None

    def mode(self, pos: Position) -> Mode:
        """Return the syntactic mode at pos."""
        if self.root is None:
            return Mode.PROGRAM
        return self.root.mode(pos)

    def dig(self, pos: Position) -> List[SyntaxNode]:
        """Nodes enclosing pos, innermost first."""
        if self.root is None:
            return []
        return self.root.dig(pos)

    def substring(self, node: SyntaxNode) -> str:
        """
        Return the text a node covers.

        Args:
            node: A node of this document's tree

        Returns:
            The covered text

        Raises:
            InvariantViolation: If the node's range does not fit the text
        """
        try:
            return node.as_str(self.text)
        except InvariantViolation:
            logger.error("Node range does not fit document text", exc_info=True)
            raise

    def pretty_text(self) -> str:
        if self.root is None:
            return ""
        return self.root.pretty_text(self.text)

    def summary(self) -> Dict[str, Any]:
        """Short description of the analysis, for tool responses."""
        return {
            "parsed": self.has_tree,
            "length": len(self.text),
            "line_count": self.text.count("\n") + 1,
            "symbol_count": len(self.environment),
            "errors": [_error_to_dict(error) for error in self.errors],
        }


def _error_to_dict(error: Exception) -> Dict[str, Any]:
    if isinstance(error, GrammarSyntaxError):
        return error.to_dict()
    return {"message": str(error)}


def build_document(text: str, engine: Optional[GrammarEngine] = None) -> Document:
    """
    Parse and analyze text.

    Parse failures do not raise: they produce a Document without a tree.

    Args:
        text: Full document text
        engine: Grammar engine to use; the shared Lark engine by default

    Returns:
        The analyzed Document
    """
    engine = engine or get_default_engine()

    try:
        parse_tree = engine.parse(PROGRAM_RULE, text)
    except GrammarSyntaxError as e:
        logger.debug("Document does not parse: %s", e.message)
        return Document(text=text, errors=(e,))

    root = SyntaxNode.from_parse_node(parse_tree)
    try:
        environment = Environment.from_tree(root, text)
    except InvariantViolation as e:
        logger.error("Discarding syntax tree that does not fit its text: %s", e)
        return Document(text=text, errors=(e,))

    return Document(text=text, root=root, environment=environment)
