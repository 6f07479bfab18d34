"""
Alex MCP Proxy Server implementation.
"""

from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import ServerCapabilities, TextContent, Tool

from alex_mcp_proxy import __version__
from alex_mcp_proxy.backend import ERROR_PREFIX, BackendClient
from alex_mcp_proxy.config import ProxySettings
from alex_mcp_proxy.logging_config import get_logger
from alex_mcp_proxy.tools import TOOLS, get_tool

logger = get_logger(__name__)

SERVER_NAME = "alex-mcp-proxy"


class AlexProxyServer:
    """MCP server exposing the Alex tools and forwarding calls to the backend."""

    def __init__(self, settings: ProxySettings, backend: Optional[BackendClient] = None):
        """
        Initialize the proxy server.

        Args:
            settings: Immutable session settings
            backend: Backend client. Defaults to one built from settings.
        """
        self.settings = settings
        self.backend = backend or BackendClient(settings)
        self.server = Server(SERVER_NAME)

        self._register_handlers()

    def list_tools(self) -> List[Tool]:
        return [spec.to_mcp_tool() for spec in TOOLS]

    async def handle_call(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """
        Forward one tool call to the backend.

        Backend failures come back as "ERROR: ..." text, never as exceptions.

        Args:
            name: Tool name
            arguments: Tool arguments; "request" is forwarded unvalidated

        Returns:
            A single text content item

        Raises:
            ValueError: If the tool name is unknown
        """
        spec = get_tool(name)
        if spec is None:
            available = ", ".join(s.name for s in TOOLS)
            raise ValueError(f"Unknown tool: {name}. Available tools: {available}")

        request = (arguments or {}).get("request")
        logger.info(f"Tool called: {name}")
        if isinstance(request, str):
            logger.debug(f"Question: {request[:100]}")

        try:
            reply = await self.backend.ask(request, is_comparison=spec.is_comparison)
            text = reply.as_tool_text()
        except Exception as e:
            logger.error(f"Unexpected error calling backend for {name}: {e}", exc_info=True)
            text = f"{ERROR_PREFIX}{e}"

        return [TextContent(type="text", text=text)]

    def _register_handlers(self):
        """Register MCP server handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            logger.debug("list_tools called")
            return self.list_tools()

        # Input is passed through as-is; the backend decides what an empty question means.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            return await self.handle_call(name, arguments)

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=SERVER_NAME,
            server_version=__version__,
            capabilities=ServerCapabilities.model_validate({"tools": {}}),
        )

    async def run(self):
        """Serve over stdio until the host closes the transport."""
        logger.info("Starting MCP proxy server (stdio mode)...")
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Proxy server ready, waiting for requests from MCP client...")
            await self.server.run(
                read_stream,
                write_stream,
                self.initialization_options(),
            )
        logger.info("MCP client disconnected, shutting down")
