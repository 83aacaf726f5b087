"""
Base service class providing common functionality for all services.

Every service wraps the MCP Context of one request and reaches the shared
document store through it.
"""

from abc import ABC
from typing import Optional

from mcp.server.fastmcp import Context

from ..document.document import Document
from ..document.store import DocumentStore
from ..syntax.position import Position
from ..utils import ContextHelper, ValidationHelper


class BaseService(ABC):
    """
    Base class for all MCP services.

    Provides context access through ContextHelper and the validation steps
    shared by the document-oriented tools.
    """

    def __init__(self, ctx: Context):
        """
        Initialize the base service.

        Args:
            ctx: The MCP Context object containing request and lifespan context
        """
        self.ctx = ctx
        self.helper = ContextHelper(ctx)

    @property
    def store(self) -> DocumentStore:
        """
        The shared document store.

        Raises:
            ValueError: If the store is not available
        """
        error = self.helper.get_store_error()
        if error:
            raise ValueError(error)
        return self.helper.store

    def _require_valid_uri(self, uri: str) -> None:
        error = ValidationHelper.validate_uri(uri)
        if error:
            raise ValueError(error)

    def _require_document(self, uri: str) -> Document:
        """
        Look up an open document.

        Args:
            uri: Document URI

        Returns:
            The current Document for uri

        Raises:
            ValueError: If uri is invalid or the document is not open
        """
        self._require_valid_uri(uri)
        document = self.store.get(uri)
        if document is None:
            raise ValueError(f"Document not open: {uri}. Use open_document first.")
        return document

    def _require_position(self, line: int, character: int) -> Position:
        error = ValidationHelper.validate_position(line, character)
        if error:
            raise ValueError(error)
        return Position(line=line, character=character)

    def _optional_trigger(self, trigger: Optional[str]) -> Optional[str]:
        error = ValidationHelper.validate_trigger_character(trigger)
        if error:
            raise ValueError(error)
        return trigger or None
