"""
MCP Remote Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from mcp_remote.configs.logging import get_logger, setup_logging

# Constants
from mcp_remote.configs.constants import (
    JSONRPC_VERSION,
    PROTOCOL_VERSION,
    TIMEOUTS,
    USER_AGENT,
    get_timeout,
)

# Settings
from mcp_remote.configs.settings import BridgeConfig, load_config, validate_endpoint

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Constants
    "JSONRPC_VERSION",
    "PROTOCOL_VERSION",
    "TIMEOUTS",
    "USER_AGENT",
    "get_timeout",
    # Settings
    "BridgeConfig",
    "load_config",
    "validate_endpoint",
]
