"""
Logging configuration for the Alex MCP Proxy.

Stdout carries the MCP transport, so every log line goes to stderr.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Configure the root logger for the proxy process.

    Args:
        level: Logging level name. Unknown names fall back to INFO.
        stream: Output stream. Defaults to stderr; never pass stdout.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )
    logging.getLogger("alex_mcp_proxy").setLevel(numeric_level)


def get_logger(name: str = "alex_mcp_proxy") -> logging.Logger:
    """Get a logger for a module (typically called with __name__)."""
    return logging.getLogger(name)
