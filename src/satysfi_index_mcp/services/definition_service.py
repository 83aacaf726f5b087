"""
Definition Service - jump from a command or variable to its definition.

Lookup is name-based over the document's environment: the innermost name
token under the cursor is read and the last binding with the same name and
kind is returned.
"""

from typing import Any, Dict, Optional

from .base_service import BaseService
from ..document.document import Document
from ..syntax.environment import SymbolKind
from ..syntax.position import Position, Range
from ..syntax.rules import Rule

# Name tokens that can refer to a binding, and where to look them up.
_KIND_BY_RULE = {
    Rule.INLINE_CMD_NAME.value: SymbolKind.INLINE_COMMAND,
    Rule.BLOCK_CMD_NAME.value: SymbolKind.BLOCK_COMMAND,
    Rule.MATH_CMD_NAME.value: SymbolKind.MATH_COMMAND,
    Rule.VAR.value: SymbolKind.VARIABLE,
}


def find_definition(document: Document, pos: Position) -> Optional[Range]:
    """
    Locate the definition of the symbol at pos.

    Args:
        document: The analyzed document
        pos: Cursor position

    Returns:
        Range of the defining name token, or None if there is no symbol at
        pos or it is not defined in this document
    """
    for node in document.dig(pos):
        kind = _KIND_BY_RULE.get(str(node.rule))
        if kind is None:
            continue
        name = document.substring(node)
        symbol = document.environment.latest(kind, name)
        return symbol.definition_range if symbol else None
    return None


class DefinitionService(BaseService):
    """Service wrapper around find_definition for MCP tools."""

    def find_definition(self, uri: str, line: int, character: int) -> Dict[str, Any]:
        """
        Find the definition of the symbol at a cursor position.

        Returns:
            Dictionary with 'found' and, when found, the definition 'range'
        """
        document = self._require_document(uri)
        pos = self._require_position(line, character)

        definition = find_definition(document, pos)
        if definition is None:
            return {"uri": uri, "found": False}
        return {"uri": uri, "found": True, "range": definition.to_dict()}
