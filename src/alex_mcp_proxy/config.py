"""
Session configuration read from the environment with Pydantic validation.
"""

import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from alex_mcp_proxy.client_identity import resolve_client_type
from alex_mcp_proxy.logging_config import get_logger

logger = get_logger(__name__)

API_URL_ENV = "ALEX_API_URL"
LEGACY_API_URL_ENV = "MCP_SERVER_URL"
API_KEY_ENV = "ALEX_API_KEY"
TIMEOUT_ENV = "ALEX_API_TIMEOUT"

DEFAULT_API_URL = "http://localhost:5000"
CHAT_PATH = "/api/chat/message"
HEALTH_PATH = "/api/health"


class ConfigurationError(ValueError):
    """Raised when the proxy cannot start with the given environment."""


class ProxySettings(BaseModel):
    """
    Immutable settings for one proxy process.

    Attributes:
        api_url: Backend base URL, without trailing slash
        api_key: Secret sent as X-API-Key on every request
        client_type: Resolved client identity sent as X-Client-Type
        request_timeout: Optional per-request timeout in seconds. None leaves
            requests without a timeout.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "api_url": "https://alex.api.pmats.ai",
                "api_key": "sk_live_xxxxx",
                "client_type": "mcp:mcp_github_copilot",
            }
        },
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Backend base URL",
        min_length=1,
    )
    api_key: str = Field(
        ...,
        description="API key for backend authentication",
        min_length=1,
    )
    client_type: str = Field(
        ...,
        description="Client identity tag",
        min_length=1,
    )
    request_timeout: Optional[float] = Field(
        default=None,
        description="Per-request timeout in seconds",
        gt=0,
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Strip whitespace and trailing slashes so paths join cleanly.

        A malformed URL is not rejected here; each tool call reports it as
        error text instead.
        """
        v = v.strip().rstrip("/")
        return v or DEFAULT_API_URL

    @property
    def chat_endpoint(self) -> str:
        return f"{self.api_url}{CHAT_PATH}"

    @property
    def health_endpoint(self) -> str:
        return f"{self.api_url}{HEALTH_PATH}"

    @property
    def masked_api_key(self) -> str:
        """First 12 characters of the key, safe to log."""
        return f"{self.api_key[:12]}..."


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ProxySettings:
    """
    Build the proxy settings from environment variables.

    The backend URL comes from ALEX_API_URL, then MCP_SERVER_URL, then the
    built-in default. ALEX_API_KEY is required.

    Args:
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Validated, immutable settings

    Raises:
        ConfigurationError: If the API key is missing or a value is invalid
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get(API_KEY_ENV)
    if not api_key:
        raise ConfigurationError(f"Missing required environment variable: {API_KEY_ENV} must be set")

    raw: Dict[str, Any] = {
        "api_url": environ.get(API_URL_ENV) or environ.get(LEGACY_API_URL_ENV) or DEFAULT_API_URL,
        "api_key": api_key,
        "client_type": resolve_client_type(environ),
    }
    timeout = environ.get(TIMEOUT_ENV)
    if timeout:
        raw["request_timeout"] = timeout

    try:
        settings = ProxySettings.model_validate(raw)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append(f"  {field_path}: {error['msg']}")
        error_message = "Configuration validation errors:\n" + "\n".join(errors)
        logger.debug(error_message)
        raise ConfigurationError(error_message) from e

    logger.debug(f"Loaded settings for {settings.api_url} as {settings.client_type}")
    return settings
