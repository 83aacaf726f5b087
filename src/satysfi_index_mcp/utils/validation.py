"""
Common validation logic for the MCP server.

Tool arguments arrive straight from the client; these checks turn bad input
into readable error messages before any analysis runs.
"""

import os
from typing import Optional
from urllib.parse import unquote, urlparse

from ..constants import SUPPORTED_EXTENSIONS


class ValidationHelper:
    """
    Helper class containing common validation logic.

    All methods return an error message, or None when the input is valid.
    """

    @staticmethod
    def validate_uri(uri: str) -> Optional[str]:
        if not uri or not uri.strip():
            return "Document URI cannot be empty"
        return None

    @staticmethod
    def validate_position(line: int, character: int) -> Optional[str]:
        """
        Validate a zero-based cursor position.

        Args:
            line: Line number
            character: Character index within the line

        Returns:
            Error message if validation fails, None if valid
        """
        if not isinstance(line, int) or isinstance(line, bool) or line < 0:
            return f"Line must be a non-negative integer, got {line!r}"
        if not isinstance(character, int) or isinstance(character, bool) or character < 0:
            return f"Character must be a non-negative integer, got {character!r}"
        return None

    @staticmethod
    def validate_trigger_character(trigger: Optional[str]) -> Optional[str]:
        if trigger is None or trigger == "":
            return None
        if len(trigger) != 1:
            return f"Trigger character must be a single character, got {trigger!r}"
        return None

    @staticmethod
    def validate_source_file(file_path: str) -> Optional[str]:
        """
        Validate a path to a SATySFi source file on disk.

        Args:
            file_path: Absolute or relative path

        Returns:
            Error message if validation fails, None if valid
        """
        if not file_path:
            return "File path cannot be empty"

        _, extension = os.path.splitext(file_path)
        if extension not in SUPPORTED_EXTENSIONS:
            return (f"Unsupported file extension '{extension}'. "
                    f"Expected one of: {', '.join(SUPPORTED_EXTENSIONS)}")

        if not os.path.isfile(file_path):
            return f"File does not exist: {file_path}"

        return None


def uri_to_path(uri: str) -> Optional[str]:
    """Return the local path of a file:// URI, or None for other schemes."""
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return None
    return unquote(parsed.path)
