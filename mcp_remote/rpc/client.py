"""
Remote Caller

Performs one JSON-RPC round trip over HTTP POST to the configured endpoint.
Every call opens its own httpx.AsyncClient, so concurrent calls share no
connection state.

Failures are returned, not raised: call() always yields a CallResult that is
either a decoded RpcResponse or one of TransportError / ProtocolError /
DecodeError.

Usage:
    caller = RemoteCaller(config)
    result = await caller.call(RpcRequest(method="tools/list", id=42))
    if result.delivered:
        print(result.response.result)
"""

import json
from dataclasses import dataclass
from typing import Optional

import anyio
import httpx
from pydantic import ValidationError

from mcp_remote.configs import BridgeConfig, get_logger
from mcp_remote.configs.constants import ERROR_BODY_PREVIEW, LOG_BODY_PREVIEW
from mcp_remote.exceptions import DecodeError, ProtocolError, RemoteCallError, TransportError
from mcp_remote.rpc.models import RpcRequest, RpcResponse

logger = get_logger("rpc")


@dataclass(frozen=True)
class CallResult:
    """Outcome of one remote call: exactly one of response/failure is set."""

    response: Optional[RpcResponse] = None
    failure: Optional[RemoteCallError] = None

    @property
    def delivered(self) -> bool:
        """The round trip produced a decoded JSON-RPC response.

        Says nothing about the response itself, which may still carry an error.
        """
        return self.failure is None

    def unwrap(self) -> RpcResponse:
        """Return the response or raise the stored failure."""
        if self.failure is not None:
            raise self.failure
        return self.response


def decode_response(status_code: int, body: str) -> CallResult:
    """
    Turn an HTTP status and body into a CallResult.

    Pure function of its inputs; kept separate from the network code so the
    status/decoding rules can be checked without a server.
    """
    if not 200 <= status_code < 300:
        return CallResult(failure=ProtocolError(status_code, body))

    try:
        payload = json.loads(body)
    except ValueError:
        return CallResult(
            failure=DecodeError(f"Invalid JSON response: {body[:ERROR_BODY_PREVIEW]}", body[:ERROR_BODY_PREVIEW])
        )

    if not isinstance(payload, dict):
        return CallResult(
            failure=DecodeError(
                f"Invalid JSON-RPC response: expected an object, got {type(payload).__name__}",
                body[:ERROR_BODY_PREVIEW],
            )
        )

    try:
        response = RpcResponse.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]["msg"] if e.errors() else str(e)
        return CallResult(failure=DecodeError(f"Invalid JSON-RPC response: {first}", body[:ERROR_BODY_PREVIEW]))

    return CallResult(response=response)


class RemoteCaller:
    """
    HTTP JSON-RPC client bound to a single endpoint.

    Args:
        config: Bridge configuration (endpoint, timeout, TLS policy, User-Agent)
        transport: Optional httpx transport, used by tests to stub the network
    """

    def __init__(self, config: BridgeConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

    async def call(self, request: RpcRequest) -> CallResult:
        """
        POST request to the endpoint and decode the reply.

        The whole round trip is bounded by config.timeout; on expiry the
        in-flight request is cancelled and a TransportError("timeout") returned.
        """
        body = json.dumps(request.to_wire())
        try:
            with anyio.fail_after(self.config.timeout):
                async with httpx.AsyncClient(
                    timeout=self.config.timeout,
                    verify=self.config.verify_tls,
                    transport=self._transport,
                ) as client:
                    response = await client.post(self.config.endpoint_url, content=body, headers=self.headers)
        except (TimeoutError, httpx.TimeoutException):
            logger.error(f"Request timeout: {request.method} (id={request.id})")
            return CallResult(failure=TransportError("Request timeout", reason="timeout"))
        except httpx.RequestError as e:
            logger.error(f"Request error: {request.method} (id={request.id}): {e}")
            return CallResult(failure=TransportError(str(e) or type(e).__name__, reason=type(e).__name__))

        text = response.text
        logger.info(f"HTTP response: {response.status_code} - {text[:LOG_BODY_PREVIEW]}...")

        result = decode_response(response.status_code, text)
        if isinstance(result.failure, DecodeError):
            logger.error(f"Response parse error: {result.failure.message}")
        return result
