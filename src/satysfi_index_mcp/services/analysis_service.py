"""
Analysis Service - cursor modes and document symbols.
"""

from typing import Any, Dict, Optional

from .base_service import BaseService
from ..syntax.environment import SymbolKind


class AnalysisService(BaseService):
    """Read-only queries against an open document's analysis."""

    def get_cursor_mode(self, uri: str, line: int, character: int) -> Dict[str, Any]:
        """
        Classify the syntactic mode at a cursor position.

        Args:
            uri: Document URI
            line: Zero-based line
            character: Zero-based character within the line

        Returns:
            Dictionary with the mode and the rules enclosing the cursor,
            innermost first
        """
        document = self._require_document(uri)
        pos = self._require_position(line, character)

        return {
            "uri": uri,
            "mode": document.mode(pos).value,
            "parsed": document.has_tree,
            "enclosing_rules": [str(node.rule) for node in document.dig(pos)],
        }

    def list_symbols(self, uri: str, kind: Optional[str] = None) -> Dict[str, Any]:
        """
        List the bindings a document defines.

        Args:
            uri: Document URI
            kind: Restrict to one of inline_command, block_command,
                math_command or variable

        Raises:
            ValueError: If kind is not a known symbol kind
        """
        document = self._require_document(uri)
        environment = document.environment

        if kind:
            try:
                symbol_kind = SymbolKind(kind)
            except ValueError:
                valid = ", ".join(k.value for k in SymbolKind)
                raise ValueError(f"Unknown symbol kind '{kind}'. Expected one of: {valid}") from None
            symbols = [symbol.to_dict() for symbol in environment.symbols(symbol_kind)]
            return {"uri": uri, "kind": symbol_kind.value, "symbols": symbols}

        return {"uri": uri, **environment.to_dict()}
