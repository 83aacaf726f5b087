"""
Shared constants for the SATySFi Index MCP server.
"""

SERVER_NAME = "SatysfiIndex"
CONFIG_RESOURCE_URI = "config://satysfi-index"

# Grammar rule a whole document is parsed from
PROGRAM_RULE = "program"

# SATySFi source file extensions
SUPPORTED_EXTENSIONS = [
    '.saty',                          # Documents
    '.satyh',                         # Headers (PDF backend)
    '.satyg',                         # Generic headers
]

# Completion resource shipped with the package
COMPLETION_RESOURCE_PACKAGE = "satysfi_index_mcp.resources"
COMPLETION_RESOURCE_FILE = "completion.json"

# Characters that open a command or a variable reference
TRIGGER_CHARACTERS = ("\\", "+", "#")

# Environment variables
ENV_TRANSPORT = "MCP_TRANSPORT"
ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_LOG_LEVEL = "SATYSFI_LOG_LEVEL"
ENV_COMPLETION_RESOURCES = "SATYSFI_COMPLETION_RESOURCES"

DEFAULT_HOST = "0.0.0.0"  # nosec B104
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
