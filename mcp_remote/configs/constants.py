"""
MCP Remote Constants

Static values that rarely change: protocol identifiers, outgoing HTTP
headers, correlation id range, and timeout configuration.
"""

from mcp_remote import __version__

# --- Identity ---

SERVER_NAME = "MCP Remote"
SERVER_VERSION = __version__

# Protocol version sent in the startup probe
PROTOCOL_VERSION = "2024-11-05"

JSONRPC_VERSION = "2.0"

# --- Outgoing HTTP ---

USER_AGENT = "Claude-User/1.0"

# TLS validation is off so self-signed and tunneled dev endpoints work
VERIFY_TLS = False

# Characters of response body included in the per-call log line
LOG_BODY_PREVIEW = 200

# Characters of response body kept on DecodeError / ProtocolError
ERROR_BODY_PREVIEW = 500

# --- Correlation IDs ---
# Outgoing ids are drawn uniformly from [ID_MIN, ID_MAX]

ID_MIN = 1
ID_MAX = 999_999

# Fixed id of the startup initialize probe
PROBE_REQUEST_ID = 1

# --- Timeout Configuration ---
# Centralized timeout values (in seconds)

TIMEOUTS = {
    "remote_call": 30,  # Every outgoing JSON-RPC call, probe included
}


def get_timeout(key: str, default: int | float | None = None) -> int | float:
    """
    Get a timeout value by key.

    Args:
        key: Timeout key from TIMEOUTS dict
        default: Default value if key not found

    Returns:
        Timeout value in seconds
    """
    if default is None:
        default = TIMEOUTS["remote_call"]
    return TIMEOUTS.get(key, default)
