"""
MCP Remote command line entry point.

Usage:
    mcp-remote <server-url>

Environment variables:
    MCP_REMOTE_DEBUG: Enable debug logging (default: false)
    MCP_REMOTE_LOG_FILE: Also log to this file (default: none)
    MCP_REMOTE_TIMEOUT: Per-call timeout in seconds (default: 30)
    MCP_REMOTE_VERIFY_TLS: Validate TLS certificates (default: false)
    MCP_REMOTE_USER_AGENT: User-Agent for outgoing calls
"""

import argparse
import signal
import sys
from typing import Optional, Sequence

import anyio

from mcp_remote.bridge import BridgeSession
from mcp_remote.configs import get_logger, load_config, setup_logging
from mcp_remote.exceptions import ConfigurationError

USAGE = "Usage: mcp-remote <server-url>"
EXAMPLE = "Example: mcp-remote https://example.ngrok-free.app/wp-json/mcp/v1/mcp-server/<token>"

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-remote",
        description="Bridge a stdio MCP client to a remote HTTP JSON-RPC MCP server",
    )
    parser.add_argument("server_url", nargs="?", help="Remote MCP endpoint URL")
    return parser


def _handle_shutdown(signum, frame) -> None:
    name = signal.Signals(signum).name
    print(f"\nReceived {name}, shutting down gracefully...", file=sys.stderr)
    sys.exit(0)


def install_signal_handlers() -> None:
    signal.signal(signal.SIGINT, _handle_shutdown)
    signal.signal(signal.SIGTERM, _handle_shutdown)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the bridge. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    if not args.server_url:
        print(USAGE, file=sys.stderr)
        print(EXAMPLE, file=sys.stderr)
        return 1

    setup_logging()

    try:
        config = load_config(args.server_url)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    install_signal_handlers()

    try:
        anyio.run(BridgeSession(config).run)
    except KeyboardInterrupt:
        logger.info("Bridge interrupted")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1
    return 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())
