"""
Service layer for the SATySFi Index MCP server.

- DocumentService: opening, updating and closing documents
- AnalysisService: cursor modes and symbol listings
- DefinitionService: go-to-definition
- CompletionService: completion candidates

Each service takes the MCP Context in its constructor, exposes one method per
MCP entry point and raises ValueError for bad requests.
"""

from .analysis_service import AnalysisService
from .base_service import BaseService
from .completion_service import CompletionCatalog, CompletionItem, CompletionService, get_completion_items
from .definition_service import DefinitionService, find_definition
from .document_service import DocumentService

__all__ = [
    "BaseService",
    "AnalysisService",
    "DocumentService",
    "DefinitionService",
    "CompletionService",
    "CompletionCatalog",
    "CompletionItem",
    "find_definition",
    "get_completion_items",
]
