"""
Completion Service - completion candidates at a cursor position.

Which candidates are offered depends on the syntactic mode at the cursor and
on the character that triggered the request:

- program mode without a trigger: the document's variables and the
  primitives listed in the completion resource
- horizontal mode after a backslash: inline commands
- vertical mode after a plus sign: block commands
- math mode after a backslash: math commands

Command candidates insert the name without its leading sigil, since the
client has already typed it.
"""

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .base_service import BaseService
from ..constants import COMPLETION_RESOURCE_FILE, COMPLETION_RESOURCE_PACKAGE
from ..document.document import Document
from ..syntax.environment import Symbol
from ..syntax.mode import Mode
from ..syntax.position import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionItem:
    """A completion candidate in LSP terms."""

    label: str
    detail: Optional[str] = None
    documentation: Optional[str] = None
    insert_text: Optional[str] = None
    is_snippet: bool = False

    @classmethod
    def from_resource(cls, entry: Dict[str, Any]) -> "CompletionItem":
        """
        Build an item from a completion resource entry.

        Raises:
            ValueError: If the entry has no string label
        """
        label = entry.get("label")
        if not isinstance(label, str) or not label:
            raise ValueError(f"Completion entry without a label: {entry!r}")
        return cls(
            label=label,
            detail=entry.get("detail"),
            documentation=entry.get("documentation"),
            insert_text=entry.get("insert_text"),
            is_snippet=entry.get("insert_text_format") == "snippet",
        )

    @classmethod
    def from_symbol(cls, symbol: Symbol, strip_sigil: bool = False) -> "CompletionItem":
        insert_text = symbol.name[1:] if strip_sigil else None
        return cls(label=symbol.name, detail=symbol.name, insert_text=insert_text)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"label": self.label}
        if self.detail is not None:
            result["detail"] = self.detail
        if self.documentation is not None:
            result["documentation"] = {"kind": "markdown", "value": self.documentation}
        if self.insert_text is not None:
            result["insertText"] = self.insert_text
        if self.is_snippet:
            result["insertTextFormat"] = "snippet"
        return result


class CompletionCatalog:
    """Completion items that do not come from the document itself."""

    def __init__(self, primitives: Iterable[CompletionItem] = ()):
        self.primitives = tuple(primitives)

    @classmethod
    def from_json(cls, raw: str) -> "CompletionCatalog":
        """
        Parse a completion resource.

        Args:
            raw: JSON object with a "primitive" array of items

        Raises:
            ValueError: If the resource is malformed
        """
        data = json.loads(raw)
        if not isinstance(data, dict) or "primitive" not in data:
            raise ValueError("No field 'primitive' found in completion resource")
        entries = data["primitive"]
        if not isinstance(entries, list):
            raise ValueError("Field 'primitive' of completion resource must be a list")
        return cls(CompletionItem.from_resource(entry) for entry in entries)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "CompletionCatalog":
        """
        Load the completion resource.

        A missing or malformed resource yields an empty catalog.

        Args:
            path: JSON file to load; the packaged resource when omitted

        Returns:
            CompletionCatalog instance
        """
        try:
            if path:
                raw = Path(path).read_text(encoding="utf-8")
            else:
                raw = (resources.files(COMPLETION_RESOURCE_PACKAGE)
                       .joinpath(COMPLETION_RESOURCE_FILE)
                       .read_text(encoding="utf-8"))
            catalog = cls.from_json(raw)
        except (OSError, ValueError, AttributeError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(f"Failed to load completion resources: {e}")
            return cls()

        logger.info(f"Loaded {len(catalog.primitives)} primitive completion items")
        return catalog


def get_completion_items(document: Document, pos: Position, trigger: Optional[str],
                         catalog: Optional[CompletionCatalog] = None) -> List[CompletionItem]:
    """
    Compute completion candidates.

    Args:
        document: The analyzed document
        pos: Cursor position
        trigger: Character that triggered completion, if any
        catalog: Primitive items offered in program mode

    Returns:
        Completion items; empty when the document does not parse
    """
    if not document.has_tree:
        return []

    mode = document.mode(pos)
    logger.debug(f"Completion in {mode.value} mode, trigger {trigger!r}")
    environment = document.environment

    if mode is Mode.PROGRAM:
        if trigger:
            return []
        items = [CompletionItem.from_symbol(symbol) for symbol in environment.variables]
        if catalog is not None:
            items.extend(catalog.primitives)
        return items

    if mode is Mode.MATH and trigger == "\\":
        symbols = environment.math_cmds
    elif mode is Mode.HORIZONTAL and trigger == "\\":
        symbols = environment.inline_cmds
    elif mode is Mode.VERTICAL and trigger == "+":
        symbols = environment.block_cmds
    else:
        return []
    return [CompletionItem.from_symbol(symbol, strip_sigil=True) for symbol in symbols]


class CompletionService(BaseService):
    """Service wrapper around get_completion_items for MCP tools."""

    def get_completions(self, uri: str, line: int, character: int,
                        trigger_character: Optional[str] = None) -> Dict[str, Any]:
        """
        Get completion candidates at a cursor position.

        Returns:
            Dictionary with the cursor mode and the list of items
        """
        document = self._require_document(uri)
        pos = self._require_position(line, character)
        trigger = self._optional_trigger(trigger_character)

        items = get_completion_items(document, pos, trigger, self.helper.completion_catalog)
        return {
            "uri": uri,
            "mode": document.mode(pos).value,
            "is_incomplete": False,
            "items": [item.to_dict() for item in items],
        }
