"""MCP Server - JSON-RPC dispatch, tool registry and transports.

Exposes the Zendesk Help Center tools to MCP clients over stdio or HTTP.
"""

from mcp_server.dispatcher import InvalidRequestError, Method, ProtocolDispatcher
from mcp_server.registry import (
    InvalidArgumentError,
    MissingArgumentError,
    ToolError,
    ToolRegistry,
    UnknownToolError,
)
from mcp_server.stdio import StdioServer

__all__ = [
    "InvalidRequestError",
    "Method",
    "ProtocolDispatcher",
    "InvalidArgumentError",
    "MissingArgumentError",
    "ToolError",
    "ToolRegistry",
    "UnknownToolError",
    "StdioServer",
]
