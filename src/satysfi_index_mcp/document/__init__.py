"""
Documents and the store of open documents.
"""

from .document import Document, build_document
from .store import DocumentStore

__all__ = ["Document", "build_document", "DocumentStore"]
