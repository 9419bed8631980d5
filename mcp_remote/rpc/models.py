"""
JSON-RPC 2.0 envelope models for outgoing calls.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from mcp_remote.configs.constants import JSONRPC_VERSION

RequestId = Union[int, str]


class RpcRequest(BaseModel):
    """One outgoing JSON-RPC request."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    method: str
    params: Any = None
    id: RequestId

    def to_wire(self) -> dict:
        """Body for the HTTP POST. params is always sent, {} when unset."""
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": self.params if self.params is not None else {},
            "id": self.id,
        }


class RpcErrorObject(BaseModel):
    """The error member of a JSON-RPC response."""

    code: int
    message: str
    data: Any = None


class RpcResponse(BaseModel):
    """
    A decoded JSON-RPC response.

    Exactly one of result/error is present. A "result": null sent next to an
    error is tolerated; a null result on its own shapes like an empty one.
    """

    model_config = ConfigDict(extra="ignore")

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    result: Any = None
    error: Optional[RpcErrorObject] = None
    id: Optional[RequestId] = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "RpcResponse":
        has_error = self.error is not None
        has_result = "result" in self.model_fields_set
        if has_error and self.result is not None:
            raise ValueError("response carries both 'result' and 'error'")
        if not has_error and not has_result:
            raise ValueError("response carries neither 'result' nor 'error'")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None
