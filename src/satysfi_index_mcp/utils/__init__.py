"""
Utility modules for the SATySFi Index MCP server.

- error_handler: Decorator-based error handling for MCP entry points
- context_helper: Access to the server's lifespan state
- validation: Validation of tool arguments
"""

from .context_helper import ContextHelper
from .error_handler import (
    format_error,
    handle_mcp_errors,
    handle_mcp_resource_errors,
    handle_mcp_tool_errors,
)
from .validation import ValidationHelper, uri_to_path

__all__ = [
    "format_error",
    "handle_mcp_errors",
    "handle_mcp_resource_errors",
    "handle_mcp_tool_errors",
    "ContextHelper",
    "ValidationHelper",
    "uri_to_path",
]
