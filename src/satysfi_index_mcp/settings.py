"""
Server settings

Settings are read once from environment variables when the server starts.
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from .constants import (
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    ENV_COMPLETION_RESOURCES,
    ENV_HOST,
    ENV_LOG_LEVEL,
    ENV_PORT,
    ENV_TRANSPORT,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ServerSettings:
    """Runtime configuration of the server."""

    transport: str = "stdio"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    completion_resources: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        """
        Build settings from environment variables.

        Unusable values fall back to the defaults with a warning.

        Args:
            environ: Mapping to read from; os.environ by default

        Returns:
            ServerSettings instance
        """
        environ = os.environ if environ is None else environ

        transport = environ.get(ENV_TRANSPORT, "stdio").strip().lower() or "stdio"

        port = DEFAULT_PORT
        raw_port = environ.get(ENV_PORT)
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                logger.warning(f"Ignoring invalid {ENV_PORT}={raw_port!r}, using {DEFAULT_PORT}")

        log_level = environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in _LOG_LEVELS:
            logger.warning(f"Ignoring invalid {ENV_LOG_LEVEL}={log_level!r}, using {DEFAULT_LOG_LEVEL}")
            log_level = DEFAULT_LOG_LEVEL

        return cls(
            transport=transport,
            host=environ.get(ENV_HOST, DEFAULT_HOST),
            port=port,
            log_level=log_level,
            completion_resources=environ.get(ENV_COMPLETION_RESOURCES) or None,
        )

    @property
    def is_http(self) -> bool:
        return self.transport == "http"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
