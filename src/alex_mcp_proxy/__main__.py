"""
Main entry point for the Alex MCP Proxy.
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from alex_mcp_proxy.config import API_KEY_ENV, ConfigurationError, ProxySettings, load_settings
from alex_mcp_proxy.logging_config import get_logger, setup_logging

logger = get_logger("alex_mcp_proxy")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="alex-mcp-proxy",
        description="MCP stdio proxy for the Alex backend",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check that the backend is reachable and exit",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    log_level = os.getenv("MCP_PROXY_LOG_LEVEL", "INFO")
    setup_logging(level=log_level)
    args = parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        logger.error(f"Example: export {API_KEY_ENV}=sk_live_xxxxx")
        sys.exit(1)

    logger.info(f"Connecting to Alex API: {settings.api_url}")
    logger.info(f"API Key: {settings.masked_api_key}")
    logger.info(f"Client Type: {settings.client_type}")

    if args.check:
        sys.exit(0 if asyncio.run(check_backend(settings)) else 1)

    try:
        asyncio.run(async_main(settings))
    except Exception as e:
        logger.error(f"Error running proxy server: {e}", exc_info=True)
        sys.exit(1)


async def check_backend(settings: ProxySettings) -> bool:
    from alex_mcp_proxy.backend import BackendClient

    return await BackendClient(settings).check_health()


async def async_main(settings: ProxySettings):
    """Async main entry point."""
    from alex_mcp_proxy.server import AlexProxyServer

    proxy = AlexProxyServer(settings)
    await proxy.run()


if __name__ == "__main__":
    main()
