"""
Open document store.

Maps document URIs to their latest analyzed Document. A Document is built
completely before it is published, so readers always see either the old or
the new analysis of a buffer, never a mix.
"""

import logging
import threading
from typing import Dict, List, Optional

from ..grammar.engine import GrammarEngine
from .document import Document, build_document

logger = logging.getLogger(__name__)


class DocumentStore:
    """Thread-safe map of open documents."""

    def __init__(self, engine: Optional[GrammarEngine] = None):
        """
        Initialize the store.

        Args:
            engine: Grammar engine used for every document; the shared Lark
                engine when omitted
        """
        self._engine = engine
        self._documents: Dict[str, Document] = {}
        self._lock = threading.RLock()

    def get(self, uri: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(uri)

    def set(self, uri: str, text: str) -> Document:
        """
        Analyze text and publish it as the current state of uri.

        Args:
            uri: Document identifier
            text: Full document text

        Returns:
            The new Document
        """
        document = build_document(text, self._engine)
        with self._lock:
            self._documents[uri] = document

        if document.has_tree:
            logger.info(f"Analyzed {uri}: {len(document.environment)} symbols")
        else:
            logger.info(f"Analyzed {uri}: text does not parse")
        return document

    def remove(self, uri: str) -> bool:
        """Forget a document. Returns False if it was not open."""
        with self._lock:
            return self._documents.pop(uri, None) is not None

    def uris(self) -> List[str]:
        with self._lock:
            return sorted(self._documents)

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()

    def __contains__(self, uri: str) -> bool:
        with self._lock:
            return uri in self._documents

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
