"""
MCP Remote Exception Hierarchy

Centralized exception classes for structured error handling across the bridge.
All bridge-specific exceptions inherit from BridgeError.

Usage:
    from mcp_remote.exceptions import RemoteCallError, DispatchFailure

    result = await caller.call(request)
    if not result.delivered:
        raise DispatchFailure("Failed to get tools", result.failure)
"""

from typing import Any


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(BridgeError):
    """Bad endpoint URL or environment override."""

    pass


# =============================================================================
# Remote Call Errors
# =============================================================================


class RemoteCallError(BridgeError):
    """Base class for failures of one round trip to the remote endpoint.

    str() of a remote call error is its bare message; the structured fields
    stay on the instance. The message is what ends up in dispatch failures.
    """

    def __str__(self) -> str:
        return self.message


class TransportError(RemoteCallError):
    """Network-level failure: connection refused, reset, or timed out."""

    def __init__(self, message: str, reason: str = "network"):
        super().__init__(message, {"reason": reason})
        self.reason = reason


class ProtocolError(RemoteCallError):
    """HTTP status outside the 200-299 range."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"HTTP {status_code}: {body}", {"status_code": status_code})
        self.status_code = status_code
        self.body = body


class DecodeError(RemoteCallError):
    """Response body is not a well-formed JSON-RPC response."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message, {"body": body})
        self.body = body


class RemoteRpcError(RemoteCallError):
    """Well-formed JSON-RPC response carrying an error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message, {"code": code})
        self.code = code
        self.data = data


# =============================================================================
# Dispatch Errors
# =============================================================================


class DispatchFailure(BridgeError):
    """Bridge-synthesized failure propagated to the local client.

    The message is "<prefix>: <cause>", e.g. "Tool execution failed: no such tool".
    """

    def __init__(self, prefix: str, cause: BaseException):
        super().__init__(f"{prefix}: {cause}")
        self.prefix = prefix
        self.cause = cause
