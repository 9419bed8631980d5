"""
MCP Remote - a stdio-to-HTTP bridge for MCP servers.

Lets a desktop client that only speaks MCP over stdio talk to a remote MCP
server exposed as a plain HTTP JSON-RPC endpoint.
"""

__version__ = "1.0.0"
