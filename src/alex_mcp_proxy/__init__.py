"""
Alex MCP Proxy

Bridges Model Context Protocol tool calls from AI coding assistants
(GitHub Copilot, Claude Desktop, ...) to the Alex knowledge-base backend
over authenticated HTTP.
"""

__version__ = "0.1.0"
__author__ = "Alex MCP Proxy Contributors"

from alex_mcp_proxy.backend import BackendClient, BackendReply, ReplyKind
from alex_mcp_proxy.config import ConfigurationError, ProxySettings, load_settings
from alex_mcp_proxy.server import AlexProxyServer

__all__ = [
    "AlexProxyServer",
    "BackendClient",
    "BackendReply",
    "ConfigurationError",
    "ProxySettings",
    "ReplyKind",
    "load_settings",
]
