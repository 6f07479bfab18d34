"""
HTTP client for the Alex backend.

Each question becomes exactly one POST to the chat endpoint. Failures are
returned as tagged replies instead of raised, and only flattened to
"ERROR: ..." text at the tool boundary.
"""

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from alex_mcp_proxy.config import ProxySettings
from alex_mcp_proxy.logging_config import get_logger

logger = get_logger(__name__)

ERROR_PREFIX = "ERROR: "
NO_RESPONSE_TEXT = "No response from Alex API"


class ReplyKind(str, Enum):
    OK = "ok"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


@dataclass(frozen=True)
class BackendReply:
    """
    Outcome of one backend call.

    Attributes:
        kind: Success or the category of failure
        text: Answer text on success, error detail otherwise
        status_code: HTTP status when a response was received
    """

    kind: ReplyKind
    text: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.kind is ReplyKind.OK

    def as_tool_text(self) -> str:
        """Flatten to the text returned to the assistant."""
        if self.ok:
            return self.text
        return f"{ERROR_PREFIX}{self.text}"


def build_payload(question: Optional[str]) -> Dict[str, Any]:
    """Request body for the chat endpoint. Every call starts a new conversation."""
    return {"message": question, "conversation_id": None}


def build_headers(settings: ProxySettings) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "X-API-Key": settings.api_key,
        "X-Client-Type": settings.client_type,
    }


def parse_chat_response(response: httpx.Response) -> BackendReply:
    """
    Turn a backend response into a reply.

    Args:
        response: Response from the chat endpoint

    Returns:
        OK with the "message" field, or HTTP_STATUS / DECODE on failure
    """
    if not response.is_success:
        return BackendReply(
            ReplyKind.HTTP_STATUS,
            f"HTTP {response.status_code}: {response.text}",
            response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        return BackendReply(
            ReplyKind.DECODE,
            f"Invalid JSON in backend response: {e}",
            response.status_code,
        )

    if not isinstance(data, dict):
        return BackendReply(
            ReplyKind.DECODE,
            f"Expected a JSON object from backend, got {type(data).__name__}",
            response.status_code,
        )

    message = data.get("message")
    if isinstance(message, str):
        return BackendReply(ReplyKind.OK, message, response.status_code)

    error = data.get("error")
    detail = error if isinstance(error, str) and error else NO_RESPONSE_TEXT
    return BackendReply(ReplyKind.DECODE, detail, response.status_code)


class BackendClient:
    """Sends questions to the Alex chat API on behalf of the MCP tools."""

    def __init__(
        self,
        settings: ProxySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Session settings (URL, key, client type)
            transport: Optional httpx transport, used to fake the backend in tests
        """
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        """Per-call client. A request_timeout of None disables httpx's 5s default, so calls wait for the backend."""
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.request_timeout,
        )

    async def ask(self, question: Optional[str], is_comparison: bool = False) -> BackendReply:
        """
        Send one question to the backend.

        Args:
            question: Free-text question, forwarded as-is
            is_comparison: Whether the question came from the comparison tool

        Returns:
            BackendReply; never raises for network, status or decode failures
        """
        endpoint = self.settings.chat_endpoint
        payload = build_payload(question)

        logger.info(f"HTTP POST {endpoint} (comparison={is_comparison})")
        logger.debug(f"Request body: {json.dumps(payload)}")

        start_time = time.time()
        try:
            async with self._client() as client:
                response = await client.post(
                    endpoint,
                    json=payload,
                    headers=build_headers(self.settings),
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            detail = str(e) or e.__class__.__name__
            logger.error(f"API call failed: {detail}")
            return BackendReply(ReplyKind.NETWORK, detail)

        duration = time.time() - start_time
        reply = parse_chat_response(response)
        if reply.ok:
            logger.info(f"Response received ({len(reply.text)} chars, {duration:.2f}s)")
        else:
            logger.error(f"API call failed ({reply.kind.value}): {reply.text}")
        return reply

    async def check_health(self) -> bool:
        """Return True if the backend health endpoint answers with a status."""
        endpoint = self.settings.health_endpoint
        try:
            async with self._client() as client:
                response = await client.get(endpoint)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Could not reach backend at {self.settings.api_url}: {e}")
            return False

        healthy = response.is_success and "status" in response.text
        if healthy:
            logger.info(f"Backend connection successful: {endpoint}")
        else:
            logger.warning(f"Backend health check failed: HTTP {response.status_code}")
        return healthy
