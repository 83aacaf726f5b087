"""
Decorator-based error handling for MCP entry points.

A failing tool or resource must not take the server down; the decorators here
turn any exception into an error payload shaped like the entry point's normal
return value and log it.
"""

import asyncio
import functools
import json
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


def format_error(error: Exception, return_type: str = "str") -> Any:
    """
    Render an exception in the format an entry point returns.

    Args:
        error: The exception to report
        return_type: 'str', 'dict', 'json' or 'list'

    Returns:
        "Error: ..." for 'str', otherwise {"error": "Operation failed: ..."}
        as a dict, a JSON string or a single-element list
    """
    message = str(error)
    if return_type == "dict":
        return {"error": f"Operation failed: {message}"}
    if return_type == "json":
        return json.dumps({"error": f"Operation failed: {message}"})
    if return_type == "list":
        return [{"error": f"Operation failed: {message}"}]
    return f"Error: {message}"


def handle_mcp_errors(return_type: str = "str") -> Callable:
    """
    Decorator to handle exceptions in MCP entry points consistently.

    Supports both sync and async functions.

    Args:
        return_type: Format of the error payload, see format_error()

    Returns:
        Decorator function that wraps MCP entry points with error handling

    Example:
        @mcp.tool()
        @handle_mcp_errors(return_type='dict')
        def get_cursor_mode(uri: str, line: int, character: int, ctx: Context) -> Dict[str, Any]:
            return AnalysisService(ctx).get_cursor_mode(uri, line, character)
    """

    def decorator(func: Callable) -> Callable:
        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    logger.warning(f"{func.__name__} failed: {e}")
                    return format_error(e, return_type)

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.warning(f"{func.__name__} failed: {e}")
                return format_error(e, return_type)

        return sync_wrapper

    return decorator


def handle_mcp_resource_errors(func: Callable) -> Callable:
    """
    Error handler for MCP resources, which always return strings.

    Example:
        @mcp.resource("config://satysfi-index")
        @handle_mcp_resource_errors
        def get_config() -> str:
            ...
    """
    return handle_mcp_errors(return_type="str")(func)


def handle_mcp_tool_errors(return_type: str = "str") -> Callable:
    """
    Error handler for MCP tools.

    Args:
        return_type: The tool's return format ('str', 'dict', 'json' or 'list')
    """
    return handle_mcp_errors(return_type=return_type)
