"""
Context access utilities.

Services receive the MCP Context of the current request; the server's shared
state (document store, completion catalog, settings) lives in its lifespan
context.
"""

from typing import Optional

from mcp.server.fastmcp import Context

from ..document.store import DocumentStore
from ..settings import ServerSettings


class ContextHelper:
    """
    Helper class for convenient access to MCP Context data.

    Missing attributes are reported as None so that services can decide how
    to fail.
    """

    def __init__(self, ctx: Context):
        """
        Initialize the context helper.

        Args:
            ctx: The MCP Context object
        """
        self.ctx = ctx

    def _lifespan_attr(self, name: str):
        try:
            return getattr(self.ctx.request_context.lifespan_context, name, None)
        except (AttributeError, ValueError):
            # ValueError: context used outside of a request
            return None

    @property
    def store(self) -> Optional[DocumentStore]:
        """The DocumentStore shared by all requests, or None."""
        return self._lifespan_attr("store")

    @property
    def completion_catalog(self):
        """The CompletionCatalog loaded at startup, or None."""
        return self._lifespan_attr("completion_catalog")

    @property
    def settings(self) -> Optional[ServerSettings]:
        return self._lifespan_attr("settings")

    def get_store_error(self) -> Optional[str]:
        """
        Get an error message if the document store is unavailable.

        Returns:
            Error message string, or None if the store is usable
        """
        if self.store is None:
            return "Document store not available. The server lifespan has not started."
        return None
