"""
Client identity resolution.

Works out which assistant is driving the proxy from environment signals and
turns it into the ``X-Client-Type`` tag sent with every backend request.
"""

import os
import re
from typing import Callable, List, Mapping, Optional, Tuple

from alex_mcp_proxy.logging_config import get_logger

logger = get_logger(__name__)

CLIENT_NAME_ENV = "MCP_CLIENT_NAME"
CLIENT_TYPE_PREFIX = "mcp:mcp_"
FALLBACK_LABEL = "other"

Predicate = Callable[[Mapping[str, str]], bool]


def _present(var: str) -> Predicate:
    def check(environ: Mapping[str, str]) -> bool:
        return bool(environ.get(var))

    return check


def _term_program_contains(needle: str) -> Predicate:
    def check(environ: Mapping[str, str]) -> bool:
        return needle in environ.get("TERM_PROGRAM", "").lower()

    return check


# Evaluated in order, first match wins.
CLIENT_RULES: List[Tuple[Predicate, str]] = [
    (_present("GITHUB_COPILOT_TOKEN"), "github_copilot"),
    (_term_program_contains("cursor"), "cursor"),
    (_term_program_contains("windsurf"), "windsurf"),
    (_present("VSCODE_PID"), "vscode"),
    (_present("ANTHROPIC_API_KEY"), "claude_desktop"),
]


def normalize_client_name(name: str) -> str:
    """Lower-case a client name and replace anything outside [a-z_] with '_'."""
    return re.sub(r"[^a-z_]", "_", name.lower())


def detect_client_label(
    environ: Mapping[str, str],
    rules: Optional[List[Tuple[Predicate, str]]] = None,
) -> str:
    """
    Return the bare client label for an environment.

    An explicit MCP_CLIENT_NAME always wins over the detection rules.

    Args:
        environ: Environment mapping to inspect
        rules: Ordered (predicate, label) pairs. Defaults to CLIENT_RULES.

    Returns:
        Label such as "github_copilot", or "other" when nothing matches
    """
    override = environ.get(CLIENT_NAME_ENV)
    if override:
        label = normalize_client_name(override)
        logger.info(f"Client detection: {CLIENT_NAME_ENV}={label}")
        return label

    for predicate, label in rules if rules is not None else CLIENT_RULES:
        if predicate(environ):
            logger.info(f"Client detection: {label}")
            return label

    logger.info(f"Client detection: unknown client (fallback to {FALLBACK_LABEL})")
    return FALLBACK_LABEL


def resolve_client_type(environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve the full client type tag, e.g. "mcp:mcp_vscode"."""
    if environ is None:
        environ = os.environ
    return f"{CLIENT_TYPE_PREFIX}{detect_client_label(environ)}"
