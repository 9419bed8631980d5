"""
Method Dispatch Table

One MethodSpec per supported MCP method. A spec says how to build the
outgoing JSON-RPC request, how to shape a successful result into the local
reply, and what to do when the call fails.

Failure policy:
- tools/list, tools/call: propagate a DispatchFailure with a fixed prefix.
  A failed tool invocation is something the user has to see.
- resources/*, prompts/*: answer with an empty-shaped fallback. Clients probe
  these capabilities whether or not they use them, and an empty list is a
  valid answer.

A remote-reported JSON-RPC error always takes the failure path.
"""

import copy
import json
from dataclasses import dataclass
from typing import Any, Callable, Optional

from mcp import types
from pydantic import BaseModel

from mcp_remote.configs import get_logger
from mcp_remote.exceptions import DispatchFailure, RemoteCallError, RemoteRpcError
from mcp_remote.rpc.client import CallResult
from mcp_remote.rpc.models import RequestId, RpcRequest

logger = get_logger("dispatch")

LocalReply = dict[str, Any]


@dataclass(frozen=True)
class MethodSpec:
    """Static description of one bridged method."""

    method: str
    request_type: type[BaseModel]
    shape: Callable[[Any], LocalReply]
    forward_params: bool = False
    fallback: Optional[LocalReply] = None
    failure_prefix: Optional[str] = None

    @property
    def propagates(self) -> bool:
        return self.fallback is None

    def fallback_reply(self) -> LocalReply:
        return copy.deepcopy(self.fallback)


# --- Default substitution ---


def _field(result: Any, key: str, default: Any) -> Any:
    """result[key], or default when the result or the field is missing or null."""
    if not isinstance(result, dict):
        return default
    value = result.get(key)
    return default if value is None else value


def _text_content(result: Any) -> list[dict]:
    payload = result if result is not None else {}
    return [{"type": "text", "text": json.dumps(payload, separators=(",", ":"), ensure_ascii=False)}]


# --- Result shapes ---


def shape_tools_list(result: Any) -> LocalReply:
    return {"tools": _field(result, "tools", [])}


def shape_tools_call(result: Any) -> LocalReply:
    """Remote content as-is, else the whole result stringified into one text item."""
    content = _field(result, "content", None)
    if content is None:
        content = _text_content(result)
    return {"content": content}


def shape_resources_list(result: Any) -> LocalReply:
    return {"resources": _field(result, "resources", [])}


def shape_resources_read(result: Any) -> LocalReply:
    return {"contents": _field(result, "contents", [])}


def shape_prompts_list(result: Any) -> LocalReply:
    return {"prompts": _field(result, "prompts", [])}


def shape_prompts_get(result: Any) -> LocalReply:
    return {
        "description": _field(result, "description", ""),
        "messages": _field(result, "messages", []),
    }


DISPATCH_TABLE: dict[str, MethodSpec] = {
    spec.method: spec
    for spec in (
        MethodSpec(
            method="tools/list",
            request_type=types.ListToolsRequest,
            shape=shape_tools_list,
            failure_prefix="Failed to get tools",
        ),
        MethodSpec(
            method="tools/call",
            request_type=types.CallToolRequest,
            shape=shape_tools_call,
            forward_params=True,
            failure_prefix="Tool execution failed",
        ),
        MethodSpec(
            method="resources/list",
            request_type=types.ListResourcesRequest,
            shape=shape_resources_list,
            fallback={"resources": []},
        ),
        MethodSpec(
            method="resources/read",
            request_type=types.ReadResourceRequest,
            shape=shape_resources_read,
            forward_params=True,
            fallback={"contents": []},
        ),
        MethodSpec(
            method="prompts/list",
            request_type=types.ListPromptsRequest,
            shape=shape_prompts_list,
            fallback={"prompts": []},
        ),
        MethodSpec(
            method="prompts/get",
            request_type=types.GetPromptRequest,
            shape=shape_prompts_get,
            forward_params=True,
            fallback={"description": "", "messages": []},
        ),
    )
}


def build_request(spec: MethodSpec, incoming_params: Any, request_id: RequestId) -> RpcRequest:
    """Outgoing envelope: incoming params verbatim for forwarding methods, {} otherwise."""
    params = incoming_params if spec.forward_params and incoming_params is not None else {}
    return RpcRequest(method=spec.method, params=params, id=request_id)


def apply_failure(spec: MethodSpec, cause: RemoteCallError) -> LocalReply:
    """Fallback reply for degrading methods; raises DispatchFailure for propagating ones."""
    logger.error(f"{spec.method} error: {cause}")
    if spec.propagates:
        raise DispatchFailure(spec.failure_prefix, cause)
    return spec.fallback_reply()


def resolve(spec: MethodSpec, outcome: CallResult) -> LocalReply:
    """
    Shape one call outcome into the local reply.

    Pure apart from logging: the same outcome always yields an equal reply.

    Raises:
        DispatchFailure: The call failed and spec propagates failures
    """
    failure = outcome.failure
    if failure is None and outcome.response.is_error:
        error = outcome.response.error
        failure = RemoteRpcError(error.code, error.message, error.data)

    if failure is not None:
        return apply_failure(spec, failure)

    reply = spec.shape(outcome.response.result)
    for key in ("tools", "resources", "prompts"):
        if isinstance(reply.get(key), list):
            logger.info(f"Retrieved {len(reply[key])} {key} from remote server")
    return reply


def to_result(reply: LocalReply) -> types.EmptyResult:
    """
    Wrap a local reply for the MCP SDK without re-validating its content.

    Remote entries reach the client exactly as the remote sent them; the
    result model allows extra fields, so only the envelope is rebuilt.
    """
    return types.EmptyResult.model_validate(reply)
