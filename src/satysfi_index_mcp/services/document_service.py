"""
Document Service - lifecycle of open documents.

Opening, updating and closing documents, plus raw views of a document's
syntax tree.
"""

import logging
from typing import Any, Dict, Optional

from .base_service import BaseService
from ..constants import SUPPORTED_EXTENSIONS, TRIGGER_CHARACTERS
from ..utils import ValidationHelper, uri_to_path

logger = logging.getLogger(__name__)


class DocumentService(BaseService):
    """
    Service for managing the set of open documents.

    Every change replaces the whole text; the store reanalyzes it from
    scratch.
    """

    def open_document(self, uri: str, text: Optional[str] = None) -> Dict[str, Any]:
        """
        Open a document and analyze it.

        Args:
            uri: Document URI; a file:// URI may omit text to load it from disk
            text: Full document text

        Returns:
            Dictionary with the document URI and an analysis summary

        Raises:
            ValueError: If no text is given and uri does not name a readable
                SATySFi file
        """
        self._require_valid_uri(uri)
        if text is None:
            text = self._read_source(uri)

        document = self.store.set(uri, text)
        return {"uri": uri, **document.summary()}

    def update_document(self, uri: str, text: str) -> Dict[str, Any]:
        """
        Replace the text of an open document.

        Raises:
            ValueError: If the document is not open
        """
        self._require_document(uri)
        document = self.store.set(uri, text)
        return {"uri": uri, **document.summary()}

    def close_document(self, uri: str) -> str:
        self._require_valid_uri(uri)
        if not self.store.remove(uri):
            raise ValueError(f"Document not open: {uri}")
        return f"Closed {uri}"

    def list_documents(self) -> Dict[str, Any]:
        uris = self.store.uris()
        return {"documents": uris, "count": len(uris)}

    def get_server_config(self) -> Dict[str, Any]:
        """
        Describe the running server.

        Returns:
            Dictionary with the settings, open documents and completion setup
        """
        settings = self.helper.settings
        catalog = self.helper.completion_catalog
        return {
            "settings": settings.to_dict() if settings else None,
            "open_documents": self.store.uris(),
            "supported_extensions": SUPPORTED_EXTENSIONS,
            "trigger_characters": list(TRIGGER_CHARACTERS),
            "primitive_completions": len(catalog.primitives) if catalog else 0,
        }

    def get_syntax_tree(self, uri: str) -> str:
        """
        Render the syntax tree of an open document.

        Returns:
            Indented tree listing, or a note that the document does not parse
        """
        document = self._require_document(uri)
        if not document.has_tree:
            messages = "; ".join(str(error) for error in document.errors)
            return f"No syntax tree for {uri}: {messages}"
        return document.pretty_text()

    def _read_source(self, uri: str) -> str:
        path = uri_to_path(uri) or uri
        error = ValidationHelper.validate_source_file(path)
        if error:
            raise ValueError(error)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError:
            logger.debug(f"{path} is not UTF-8, trying fallback encodings")
            for encoding in ['utf-8-sig', 'shift_jis', 'euc-jp', 'latin-1']:
                try:
                    with open(path, 'r', encoding=encoding) as f:
                        return f.read()
                except UnicodeDecodeError:
                    continue

            raise ValueError(
                f"Could not decode file {path}. File may have unsupported encoding."
            ) from None
        except OSError as e:
            raise ValueError(f"Error reading file: {e}") from e
