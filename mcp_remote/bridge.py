"""
Bridge Session

Acts as an MCP server to the local client (over stdio) and as a JSON-RPC
client to the remote HTTP endpoint.

Lifecycle:
    probing  - one initialize call to the remote; failure is only logged
    serving  - stdio attached, requests handled until the client disconnects

The MCP SDK's low-level server runs each incoming request in its own task,
so slow remote calls never hold up other requests. Handlers share no
mutable state: every outgoing call gets a fresh id and its own HTTP client.
"""

import enum
from typing import Any, Optional

from mcp import types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from mcp_remote.configs import BridgeConfig, get_logger
from mcp_remote.configs.constants import PROBE_REQUEST_ID
from mcp_remote.dispatch import DISPATCH_TABLE, LocalReply, MethodSpec, build_request, resolve, to_result
from mcp_remote.exceptions import DispatchFailure, RemoteCallError, RemoteRpcError
from mcp_remote.rpc import CorrelationIdGenerator, RemoteCaller, RpcRequest
from mcp_remote.rpc.models import RequestId

logger = get_logger("bridge")


class SessionState(str, enum.Enum):
    PROBING = "probing"
    SERVING = "serving"


def _dump_params(params: Any) -> Any:
    """Incoming SDK params model back to the plain JSON the client sent."""
    if params is None:
        return None
    return params.model_dump(by_alias=True, mode="json", exclude_none=True)


class BridgeSession:
    """
    One bridge process: a local MCP server wired to one remote endpoint.

    Args:
        config: Endpoint and transport settings
        caller: Remote caller, defaults to one built from config
        ids: Correlation id source for outgoing calls
        table: Supported methods, keyed by method name
    """

    def __init__(
        self,
        config: BridgeConfig,
        caller: Optional[RemoteCaller] = None,
        ids: Optional[CorrelationIdGenerator] = None,
        table: Optional[dict[str, MethodSpec]] = None,
    ):
        self.config = config
        self.caller = caller or RemoteCaller(config)
        self.ids = ids or CorrelationIdGenerator()
        self.table = table if table is not None else DISPATCH_TABLE
        self.state = SessionState.PROBING

        self.server = Server(config.server_name, version=config.server_version)
        for spec in self.table.values():
            self.server.request_handlers[spec.request_type] = self._make_handler(spec)

    # --- Dispatch ---

    async def dispatch(self, method: str, params: Any = None, incoming_id: Optional[RequestId] = None) -> LocalReply:
        """
        Forward one local request to the remote and shape the reply.

        Args:
            method: Supported method name, e.g. "tools/list"
            params: Incoming params as plain JSON
            incoming_id: Local request id; the outgoing id never equals it

        Raises:
            DispatchFailure: The call failed and the method propagates failures
        """
        spec = self.table[method]
        if method == "tools/call":
            tool_name = params.get("name") if isinstance(params, dict) else None
            logger.info(f"Handling tools/call request for tool: {tool_name}")
        else:
            logger.info(f"Handling {method} request")

        request = build_request(spec, params, self.ids.next_id(avoid=incoming_id))
        outcome = await self.caller.call(request)
        return resolve(spec, outcome)

    def _incoming_id(self) -> Optional[RequestId]:
        try:
            return self.server.request_context.request_id
        except LookupError:
            return None

    def _make_handler(self, spec: MethodSpec):
        async def handler(req: Any) -> types.ServerResult:
            try:
                reply = await self.dispatch(spec.method, _dump_params(req.params), self._incoming_id())
                return types.ServerResult(to_result(reply))
            except DispatchFailure as e:
                raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=str(e))) from e

        return handler

    # --- Lifecycle ---

    def initialization_options(self) -> InitializationOptions:
        """Capabilities advertised to the local client at handshake."""
        return self.server.create_initialization_options(
            notification_options=NotificationOptions(
                tools_changed=True,
                resources_changed=False,
                prompts_changed=False,
            ),
            experimental_capabilities={},
        )

    def probe_request(self) -> RpcRequest:
        return RpcRequest(
            method="initialize",
            params={
                "protocolVersion": self.config.protocol_version,
                "capabilities": {},
                "clientInfo": {
                    "name": self.config.server_name,
                    "version": self.config.server_version,
                },
            },
            id=PROBE_REQUEST_ID,
        )

    async def probe(self) -> bool:
        """
        Soft connectivity check against the remote endpoint.

        Returns:
            True if the remote answered initialize without error
        """
        self.state = SessionState.PROBING
        try:
            response = (await self.caller.call(self.probe_request())).unwrap()
            if response.is_error:
                raise RemoteRpcError(response.error.code, response.error.message, response.error.data)
        except RemoteCallError as e:
            logger.warning(f"Remote server test failed: {e}")
            logger.warning("Continuing anyway, but there may be connection issues...")
            return False

        logger.info("Successfully connected to remote server")
        return True

    async def serve(self, read_stream, write_stream) -> None:
        """Handle local requests from the given streams until they close."""
        self.state = SessionState.SERVING
        await self.server.run(read_stream, write_stream, self.initialization_options())

    async def run(self) -> None:
        """Probe the remote, then serve the local client over stdio."""
        logger.info(f"Starting MCP HTTP bridge for remote server: {self.config.endpoint_url}")
        if not self.config.verify_tls:
            logger.debug("TLS certificate validation is disabled")

        await self.probe()

        logger.info("Starting stdio server...")
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Bridge started, waiting for client to connect...")
            await self.serve(read_stream, write_stream)
