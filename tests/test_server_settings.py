"""Tests for server settings and error payloads."""
import asyncio
import logging
from pathlib import Path as _TestPath
import sys

ROOT = _TestPath(__file__).resolve().parents[1]
if str(ROOT / 'src') not in sys.path:
    sys.path.insert(0, str(ROOT / 'src'))

from satysfi_index_mcp.settings import ServerSettings
from satysfi_index_mcp.utils.error_handler import format_error, handle_mcp_tool_errors


def test_defaults_without_environment():
    settings = ServerSettings.from_env({})

    assert settings.transport == "stdio"
    assert settings.port == 8080
    assert settings.log_level == "INFO"
    assert settings.completion_resources is None
    assert not settings.is_http


def test_http_transport_and_port():
    settings = ServerSettings.from_env({"MCP_TRANSPORT": "HTTP", "PORT": "9000", "HOST": "127.0.0.1"})

    assert settings.is_http
    assert settings.port == 9000
    assert settings.host == "127.0.0.1"


def test_invalid_values_fall_back_with_warning(caplog):
    caplog.set_level(logging.WARNING, logger="satysfi_index_mcp.settings")

    settings = ServerSettings.from_env({"PORT": "eighty", "SATYSFI_LOG_LEVEL": "chatty"})

    assert settings.port == 8080
    assert settings.log_level == "INFO"
    assert "PORT" in caplog.text
    assert "SATYSFI_LOG_LEVEL" in caplog.text


def test_format_error_shapes():
    error = ValueError("Document not open: x")

    assert format_error(error) == "Error: Document not open: x"
    assert format_error(error, "dict") == {"error": "Operation failed: Document not open: x"}
    assert format_error(error, "list") == [{"error": "Operation failed: Document not open: x"}]


def test_tool_errors_become_payloads():
    @handle_mcp_tool_errors(return_type="dict")
    def failing():
        raise ValueError("boom")

    @handle_mcp_tool_errors(return_type="str")
    async def failing_async():
        raise RuntimeError("later")

    assert failing() == {"error": "Operation failed: boom"}
    assert asyncio.run(failing_async()) == "Error: later"
    assert failing.__name__ == "failing"
