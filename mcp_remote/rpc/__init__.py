"""
JSON-RPC over HTTP: envelope models, correlation ids, and the remote caller.
"""

from mcp_remote.rpc.client import CallResult, RemoteCaller, decode_response
from mcp_remote.rpc.ids import CorrelationIdGenerator
from mcp_remote.rpc.models import RpcErrorObject, RpcRequest, RpcResponse

__all__ = [
    "CallResult",
    "CorrelationIdGenerator",
    "RemoteCaller",
    "RpcErrorObject",
    "RpcRequest",
    "RpcResponse",
    "decode_response",
]
