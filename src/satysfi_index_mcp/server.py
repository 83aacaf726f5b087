"""
SATySFi Index MCP Server

This MCP server analyzes SATySFi documents for LLM clients and editors. It
keeps a set of open documents, parses each one into a syntax tree and answers
position-based questions: the syntactic mode at a cursor, the definition of a
command or variable, and completion candidates.

MCP decorators delegate to domain-specific services for the actual work.
"""

import json
import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

from mcp.server.fastmcp import Context, FastMCP

from .constants import CONFIG_RESOURCE_URI, SERVER_NAME
from .document.store import DocumentStore
from .grammar.lark_engine import get_default_engine
from .services import AnalysisService, CompletionCatalog, CompletionService, DefinitionService, DocumentService
from .settings import ServerSettings
from .utils import handle_mcp_resource_errors, handle_mcp_tool_errors


def setup_logging(level: str = "INFO") -> None:
    """Send all logging to stderr; stdout carries the stdio transport."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)

    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


logger = logging.getLogger(__name__)


@dataclass
class SatysfiIndexContext:
    """Context for the SATySFi Index MCP server."""

    settings: ServerSettings
    store: DocumentStore
    completion_catalog: CompletionCatalog


@asynccontextmanager
async def index_lifespan(_server: FastMCP) -> AsyncIterator[SatysfiIndexContext]:
    """Manage the lifecycle of the SATySFi Index MCP server."""
    settings = ServerSettings.from_env()

    # Compile the grammar up front so a broken grammar fails at startup.
    engine = get_default_engine()

    context = SatysfiIndexContext(
        settings=settings,
        store=DocumentStore(engine),
        completion_catalog=CompletionCatalog.load(settings.completion_resources),
    )
    logger.info("SATySFi index server ready")

    try:
        yield context
    finally:
        logger.info(f"Shutting down with {len(context.store)} open documents")
        context.store.clear()


mcp = FastMCP(SERVER_NAME, lifespan=index_lifespan)

# ----- RESOURCES -----


@mcp.resource(CONFIG_RESOURCE_URI)
@handle_mcp_resource_errors
def get_config() -> str:
    """Get the current configuration of the SATySFi index server."""
    ctx = mcp.get_context()
    return json.dumps(DocumentService(ctx).get_server_config(), indent=2)


# ----- TOOLS -----


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def open_document(uri: str, ctx: Context, text: Optional[str] = None) -> Dict[str, Any]:
    """
    Open a SATySFi document and analyze it.

    Pass the full text, or omit it for a file:// URI (or plain path) of a
    .saty/.satyh/.satyg file to read it from disk.
    """
    return DocumentService(ctx).open_document(uri, text)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def update_document(uri: str, text: str, ctx: Context) -> Dict[str, Any]:
    """Replace the full text of an open document and reanalyze it."""
    return DocumentService(ctx).update_document(uri, text)


@mcp.tool()
@handle_mcp_tool_errors(return_type="str")
def close_document(uri: str, ctx: Context) -> str:
    """Close an open document."""
    return DocumentService(ctx).close_document(uri)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def list_documents(ctx: Context) -> Dict[str, Any]:
    """List the URIs of all open documents."""
    return DocumentService(ctx).list_documents()


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def get_cursor_mode(uri: str, line: int, character: int, ctx: Context) -> Dict[str, Any]:
    """
    Get the syntactic mode at a zero-based cursor position.

    The mode is one of program, vertical, horizontal, math, header, literal
    or comment.
    """
    return AnalysisService(ctx).get_cursor_mode(uri, line, character)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def list_symbols(uri: str, ctx: Context, kind: Optional[str] = None) -> Dict[str, Any]:
    """
    List the commands and variables an open document defines.

    Args:
        uri: Document URI
        kind: Optional filter: inline_command, block_command, math_command
            or variable
    """
    return AnalysisService(ctx).list_symbols(uri, kind)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def find_definition(uri: str, line: int, character: int, ctx: Context) -> Dict[str, Any]:
    """Find where the command or variable at a cursor position is defined."""
    return DefinitionService(ctx).find_definition(uri, line, character)


@mcp.tool()
@handle_mcp_tool_errors(return_type="dict")
def get_completions(
    uri: str,
    line: int,
    character: int,
    ctx: Context,
    trigger_character: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Get completion candidates at a cursor position.

    Args:
        uri: Document URI
        line: Zero-based line
        character: Zero-based character within the line
        trigger_character: The character that triggered completion
            ('\\', '+' or '#'), if any
    """
    return CompletionService(ctx).get_completions(uri, line, character, trigger_character)


@mcp.tool()
@handle_mcp_tool_errors(return_type="str")
def get_syntax_tree(uri: str, ctx: Context) -> str:
    """Get the syntax tree of an open document as an indented listing."""
    return DocumentService(ctx).get_syntax_tree(uri)


def main():
    """Main function to run the MCP server."""
    settings = ServerSettings.from_env()
    setup_logging(settings.log_level)

    if settings.is_http:
        # FastMCP reads host/port from mcp.settings
        mcp.settings.host = settings.host
        mcp.settings.port = settings.port

        logger.info(f"Starting MCP server in HTTP/SSE mode on {settings.host}:{settings.port}")
        mcp.run(transport="sse")
    else:
        logger.info("Starting MCP server in stdio mode")
        mcp.run()


if __name__ == "__main__":
    main()
