"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Startup settings for the wiki server, in one dataclass.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m bauhauswiki --port 8000                          │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── WIKI_PORT=8000 python -m bauhauswiki                       │
    │                                                                      │
    │   3. Default values (in this dataclass)                             │
    └─────────────────────────────────────────────────────────────────────┘

Validation happens once, at startup: a bad value stops the process before
the socket is bound.

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ServerConfig:
    """
    Configuration for the wiki server.

    Development:
        ServerConfig(host="127.0.0.1", port=8000, log_level="DEBUG")

    Tests:
        ServerConfig(host="127.0.0.1", port=0)    # any free port
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """Interface to bind. 0.0.0.0 listens on all interfaces."""

    port: int = 24439
    """TCP port. 0 lets the OS pick a free port (see WikiServer.address)."""

    backlog: int = 128
    """Connections the OS queues before refusing new ones."""

    buffer_size: int = 4096
    """
    Bytes read for a request, in a single recv().
    Anything beyond this is not read.
    """

    read_timeout: Optional[float] = None
    """
    Seconds to wait for the request bytes.
    None blocks the connection's thread until the client sends or closes.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    seed: bool = True
    """Start with the "main" and "bauhaus" articles."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """Access log format: 'text' (one line per request) or 'json'."""

    # ─────────────────────────────────────────────────────────────────────
    # SERVER IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "BauhausWiki/1.0"
    """Value of the Server response header."""

    @property
    def log_level_number(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper())

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

            WIKI_HOST          Interface to bind (default: 0.0.0.0)
            WIKI_PORT          Port (default: 24439)
            WIKI_BUFFER_SIZE   Request read size in bytes (default: 4096)
            WIKI_READ_TIMEOUT  Seconds to wait for a request (default: none)
            WIKI_SEED          0 / false / no to start with an empty wiki
            WIKI_LOG_LEVEL     Logging level (default: INFO)
            WIKI_LOG_FORMAT    text or json (default: text)

        Usage:
            WIKI_PORT=8000 WIKI_LOG_LEVEL=DEBUG python -m bauhauswiki
        """
        read_timeout = os.getenv("WIKI_READ_TIMEOUT")
        return cls(
            host=os.getenv("WIKI_HOST", "0.0.0.0"),
            port=int(os.getenv("WIKI_PORT", "24439")),
            buffer_size=int(os.getenv("WIKI_BUFFER_SIZE", "4096")),
            read_timeout=float(read_timeout) if read_timeout else None,
            seed=os.getenv("WIKI_SEED", "1").strip().lower() not in _FALSE_VALUES,
            log_level=os.getenv("WIKI_LOG_LEVEL", "INFO"),
            log_format=os.getenv("WIKI_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid value.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 256:
            raise ValueError("buffer_size must be >= 256")

        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ValueError("read_timeout must be > 0")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}."
            )

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'.")
