"""
Shared fixtures for the Alex MCP Proxy tests.
"""

from typing import Callable, List

import httpx
import pytest

from alex_mcp_proxy.backend import BackendClient
from alex_mcp_proxy.config import ProxySettings

ASSISTANT_ENV_VARS = [
    "ALEX_API_URL",
    "MCP_SERVER_URL",
    "ALEX_API_KEY",
    "ALEX_API_TIMEOUT",
    "MCP_CLIENT_NAME",
    "GITHUB_COPILOT_TOKEN",
    "TERM_PROGRAM",
    "VSCODE_PID",
    "ANTHROPIC_API_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the proxy reads from the process environment."""
    for var in ASSISTANT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def settings() -> ProxySettings:
    return ProxySettings(
        api_url="http://alex.test",
        api_key="sk_live_testkey123456",
        client_type="mcp:mcp_github_copilot",
    )


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_backend(settings, recorded_requests) -> Callable[..., BackendClient]:
    """Build a BackendClient whose requests are answered by a handler function."""

    def factory(handler) -> BackendClient:
        def recording_handler(request: httpx.Request):
            recorded_requests.append(request)
            return handler(request)

        return BackendClient(settings, transport=httpx.MockTransport(recording_handler))

    return factory
