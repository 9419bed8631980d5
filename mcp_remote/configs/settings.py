"""
Bridge Settings

Builds the immutable BridgeConfig from the endpoint URL given on the
command line plus optional environment overrides:
- MCP_REMOTE_TIMEOUT: Per-call timeout in seconds (default: 30)
- MCP_REMOTE_VERIFY_TLS: Validate TLS certificates (default: false)
- MCP_REMOTE_USER_AGENT: User-Agent header for outgoing calls
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

from mcp_remote.configs.constants import (
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    USER_AGENT,
    VERIFY_TLS,
    get_timeout,
)
from mcp_remote.exceptions import ConfigurationError

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no", "")


@dataclass(frozen=True)
class BridgeConfig:
    """Everything a bridge session needs to know about its remote endpoint."""

    endpoint_url: str
    timeout: float = float(get_timeout("remote_call"))
    verify_tls: bool = VERIFY_TLS
    user_agent: str = USER_AGENT
    server_name: str = SERVER_NAME
    server_version: str = SERVER_VERSION
    protocol_version: str = PROTOCOL_VERSION


def validate_endpoint(url: str) -> str:
    """Check that url is an absolute http(s) URL and return it stripped."""
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            "Endpoint must be an absolute http(s) URL",
            {"endpoint": url},
        )
    return url


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}", {"value": raw})


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigurationError("Invalid MCP_REMOTE_TIMEOUT", {"value": raw}) from e
    if timeout <= 0:
        raise ConfigurationError("MCP_REMOTE_TIMEOUT must be positive", {"value": raw})
    return timeout


def load_config(endpoint_url: str, environ: Optional[Mapping[str, str]] = None) -> BridgeConfig:
    """
    Build a BridgeConfig for endpoint_url.

    Args:
        endpoint_url: Remote JSON-RPC endpoint from the command line
        environ: Environment mapping, defaults to os.environ

    Returns:
        Frozen BridgeConfig

    Raises:
        ConfigurationError: Bad endpoint URL or bad override value
    """
    if environ is None:
        environ = os.environ

    overrides = {}
    if environ.get("MCP_REMOTE_TIMEOUT"):
        overrides["timeout"] = _parse_timeout(environ["MCP_REMOTE_TIMEOUT"])
    if "MCP_REMOTE_VERIFY_TLS" in environ:
        overrides["verify_tls"] = _parse_bool("MCP_REMOTE_VERIFY_TLS", environ["MCP_REMOTE_VERIFY_TLS"])
    if environ.get("MCP_REMOTE_USER_AGENT"):
        overrides["user_agent"] = environ["MCP_REMOTE_USER_AGENT"]

    return BridgeConfig(endpoint_url=validate_endpoint(endpoint_url), **overrides)
