"""
Tests for configuration loading and validation.
"""

import pytest
from pydantic import ValidationError

from alex_mcp_proxy.backend import BackendClient, ReplyKind
from alex_mcp_proxy.config import (
    DEFAULT_API_URL,
    ConfigurationError,
    ProxySettings,
    load_settings,
)


class TestProxySettings:
    """Tests for ProxySettings model."""

    def test_valid_settings(self):
        """Test valid settings."""
        settings = ProxySettings(
            api_url="https://alex.api.pmats.ai",
            api_key="sk_live_abcdefghijklmnop",
            client_type="mcp:mcp_vscode",
        )
        assert settings.api_url == "https://alex.api.pmats.ai"
        assert settings.chat_endpoint == "https://alex.api.pmats.ai/api/chat/message"
        assert settings.health_endpoint == "https://alex.api.pmats.ai/api/health"
        assert settings.request_timeout is None

    def test_trailing_slash_stripped(self):
        """Test that trailing slashes do not produce double slashes in endpoints."""
        settings = ProxySettings(api_url="http://localhost:5000/", api_key="k", client_type="c")
        assert settings.chat_endpoint == "http://localhost:5000/api/chat/message"

    def test_settings_are_immutable(self):
        """Test that settings cannot be changed after construction."""
        settings = ProxySettings(api_key="sk_live_x", client_type="mcp:mcp_other")
        with pytest.raises(ValidationError):
            settings.api_key = "other"

    def test_whitespace_api_key_accepted(self):
        """Test that a non-empty API key is accepted as-is, even if only spaces."""
        settings = ProxySettings(api_key="   ", client_type="mcp:mcp_other")
        assert settings.api_key == "   "

    def test_empty_api_key_rejected(self):
        with pytest.raises(ValidationError):
            ProxySettings(api_key="", client_type="mcp:mcp_other")

    def test_url_without_scheme_accepted(self):
        """Test that a URL without scheme does not fail at startup."""
        settings = ProxySettings(api_url="alex.api.pmats.ai/", api_key="k", client_type="c")
        assert settings.chat_endpoint == "alex.api.pmats.ai/api/chat/message"

    def test_blank_url_uses_default(self):
        settings = ProxySettings(api_url="   ", api_key="k", client_type="c")
        assert settings.api_url == DEFAULT_API_URL

    def test_masked_api_key(self):
        """Test that only the key prefix is exposed for logging."""
        settings = ProxySettings(api_key="sk_live_0123456789abcdef", client_type="c")
        assert settings.masked_api_key == "sk_live_0123..."
        assert "abcdef" not in settings.masked_api_key


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_api_key(self):
        """Test that a missing API key is a configuration error."""
        with pytest.raises(ConfigurationError, match="ALEX_API_KEY"):
            load_settings({"ALEX_API_URL": "http://alex.test"})

    def test_empty_api_key(self):
        """Test that an empty API key counts as missing."""
        with pytest.raises(ConfigurationError, match="ALEX_API_KEY"):
            load_settings({"ALEX_API_KEY": ""})

    def test_configuration_error_is_value_error(self):
        """Test that callers can catch configuration errors as ValueError."""
        with pytest.raises(ValueError):
            load_settings({})

    def test_default_url(self):
        """Test that an unset URL falls back to the built-in default."""
        settings = load_settings({"ALEX_API_KEY": "sk_live_x"})
        assert settings.api_url == DEFAULT_API_URL

    def test_primary_url(self):
        """Test that ALEX_API_URL wins over the legacy alias."""
        settings = load_settings({
            "ALEX_API_KEY": "sk_live_x",
            "ALEX_API_URL": "https://primary.test",
            "MCP_SERVER_URL": "https://legacy.test",
        })
        assert settings.api_url == "https://primary.test"

    def test_legacy_url_alias(self):
        """Test that MCP_SERVER_URL is used when ALEX_API_URL is unset."""
        settings = load_settings({
            "ALEX_API_KEY": "sk_live_x",
            "MCP_SERVER_URL": "https://legacy.test",
        })
        assert settings.api_url == "https://legacy.test"

    def test_empty_primary_url_falls_through(self):
        """Test that an empty ALEX_API_URL is treated as unset."""
        settings = load_settings({
            "ALEX_API_KEY": "sk_live_x",
            "ALEX_API_URL": "",
            "MCP_SERVER_URL": "https://legacy.test",
        })
        assert settings.api_url == "https://legacy.test"

    def test_client_type_resolved(self):
        """Test that the client identity is resolved from the same environment."""
        settings = load_settings({"ALEX_API_KEY": "sk_live_x", "VSCODE_PID": "1234"})
        assert settings.client_type == "mcp:mcp_vscode"

    def test_timeout(self):
        """Test loading a request timeout."""
        settings = load_settings({"ALEX_API_KEY": "sk_live_x", "ALEX_API_TIMEOUT": "45"})
        assert settings.request_timeout == 45.0

    def test_invalid_timeout(self):
        """Test that a non-numeric timeout is a configuration error."""
        with pytest.raises(ConfigurationError, match="request_timeout"):
            load_settings({"ALEX_API_KEY": "sk_live_x", "ALEX_API_TIMEOUT": "soon"})

    def test_whitespace_api_key_loads(self):
        settings = load_settings({"ALEX_API_KEY": "  "})
        assert settings.api_key == "  "

    @pytest.mark.asyncio
    async def test_url_without_scheme_reported_per_call(self):
        """Test that a malformed URL loads and each call returns error text."""
        settings = load_settings({"ALEX_API_KEY": "sk_live_x", "ALEX_API_URL": "alex.api.pmats.ai"})
        assert settings.api_url == "alex.api.pmats.ai"

        reply = await BackendClient(settings).ask("How do I create a table?")

        assert reply.kind is ReplyKind.NETWORK
        assert reply.as_tool_text().startswith("ERROR:")

    def test_reads_process_environment(self, clean_env):
        """Test that os.environ is used when no mapping is given."""
        clean_env.setenv("ALEX_API_KEY", "sk_live_from_env")
        clean_env.setenv("ALEX_API_URL", "https://env.test")
        settings = load_settings()
        assert settings.api_key == "sk_live_from_env"
        assert settings.api_url == "https://env.test"
        assert settings.client_type == "mcp:mcp_other"
