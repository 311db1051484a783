"""Core data models for the Zendesk MCP Server.

Defines the JSON-RPC envelopes, the tool contracts exposed over MCP and the
Help Center records returned by the Zendesk API.
"""

from datetime import datetime
from enum import IntEnum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator

from shared.schema import create_tool_schema

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "zendesk-mcp-server"
SERVER_VERSION = "1.0.0"


# JSON-RPC envelopes

class ErrorCode(IntEnum):
    """Error codes returned in JSON-RPC error objects."""
    INVALID_REQUEST = -32600
    INTERNAL_ERROR = -32603


class ErrorObject(BaseModel):
    """JSON-RPC error payload."""
    code: int
    message: str


class JsonRpcRequest(BaseModel):
    """
    An incoming JSON-RPC request.

    The id is opaque: any JSON value, echoed back unchanged.
    """
    model_config = ConfigDict(extra="ignore")

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    method: StrictStr
    params: Optional[Any] = None


class JsonRpcResponse(BaseModel):
    """An outgoing JSON-RPC response carrying exactly one of result or error."""
    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: Optional[ErrorObject] = None

    @model_validator(mode="after")
    def _result_or_error(self) -> "JsonRpcResponse":
        if self.error is not None and self.result is not None:
            raise ValueError("A response cannot carry both a result and an error")
        return self

    @classmethod
    def success(cls, request_id: Any, result: Any) -> "JsonRpcResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, code: ErrorCode, message: str) -> "JsonRpcResponse":
        return cls(id=request_id, error=ErrorObject(code=int(code), message=message))

    def to_wire(self) -> dict[str, Any]:
        """Return the wire form: id always present, and one payload key."""
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            wire["error"] = self.error.model_dump()
        else:
            wire["result"] = self.result
        return wire


# MCP payloads

class ServerInfo(BaseModel):
    name: str = SERVER_NAME
    version: str = SERVER_VERSION


class InitializeResult(BaseModel):
    """Result of the MCP initialize handshake."""
    protocolVersion: str = PROTOCOL_VERSION
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    serverInfo: ServerInfo = Field(default_factory=ServerInfo)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    """Result of tools/call: tool output is opaque text."""
    content: list[TextContent]

    @classmethod
    def from_text(cls, text: str) -> "CallToolResult":
        return cls(content=[TextContent(text=text)])


class ToolCallParams(BaseModel):
    """Params of a tools/call request."""
    name: StrictStr
    arguments: dict[str, Any] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _null_arguments(cls, value: Any) -> Any:
        return {} if value is None else value


# Tool contracts

class ToolParameter(BaseModel):
    """Definition of a single tool parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None


class ToolDefinition(BaseModel):
    """
    Declarative description of an MCP tool.

    The JSON Schema advertised to clients is derived from the parameters.
    """
    name: str = Field(..., description="Tool name as exposed to MCP clients")
    description: str = Field(..., description="Clear description for LLM usage")
    parameters: list[ToolParameter] = Field(default_factory=list)

    @property
    def input_schema(self) -> dict[str, Any]:
        return create_tool_schema([p.model_dump() for p in self.parameters])

    def to_descriptor(self) -> dict[str, Any]:
        """Return the tool as listed by tools/list."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class SearchArticlesArguments(BaseModel):
    query: str
    limit: int = 10


class GetArticleArguments(BaseModel):
    article_id: str


class ListArticlesArguments(BaseModel):
    limit: int = 30


# Zendesk Help Center records

class ArticleSummary(BaseModel):
    """An article as returned by the Help Center search endpoint."""
    id: int
    title: str = ""
    body: Optional[str] = ""
    url: str = ""
    html_url: str = ""
    snippet: Optional[str] = None
    author_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Article(BaseModel):
    """A Help Center article."""
    id: int
    title: str = ""
    body: Optional[str] = ""
    url: str = ""
    html_url: str = ""
    author_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    draft: bool = False
    promoted: bool = False
    position: int = 0
    section_id: Optional[int] = None
