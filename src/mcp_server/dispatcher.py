"""JSON-RPC dispatcher for the MCP Server.

Parses request envelopes, routes them by method and serializes the response.
Dispatch never raises: malformed input becomes an invalid-request error and
any failure while handling a method becomes an internal error carrying the
cause's message.
"""

import json
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from pydantic import ValidationError

from shared.logging import bind_context, clear_context, get_logger
from shared.models import (
    CallToolResult,
    ErrorCode,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolCallParams,
)
from mcp_server.registry import ToolError, ToolRegistry

logger = get_logger(__name__)

MethodHandler = Callable[[Any], Awaitable[Any]]


class Method(str, Enum):
    """JSON-RPC methods this server implements."""
    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


class InvalidRequestError(Exception):
    """The raw request is not a valid JSON-RPC request envelope."""

    def __init__(self, message: str, request_id: Any = None) -> None:
        super().__init__(message)
        # Salvaged from the raw document so the error response can echo it
        self.request_id = request_id


class ProtocolDispatcher:
    """
    Translates JSON-RPC requests into tool registry calls.

    Unknown methods yield a null result rather than an error.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry
        self._handlers: dict[Method, MethodHandler] = {
            Method.INITIALIZE: self._initialize,
            Method.TOOLS_LIST: self._tools_list,
            Method.TOOLS_CALL: self._tools_call,
        }

        unhandled = set(Method) - set(self._handlers)
        if unhandled:
            raise RuntimeError(f"No handler for methods: {sorted(m.value for m in unhandled)}")

    def parse(self, raw: Union[str, bytes]) -> JsonRpcRequest:
        """
        Parse a raw request document.

        Byte input must be UTF-8.

        Raises:
            InvalidRequestError: If the document is not UTF-8, not JSON, nested
                too deeply to decode, not an object, or lacks a string method
        """
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidRequestError("Invalid request: body is not valid UTF-8") from e

        try:
            data = json.loads(raw)
        except (ValueError, TypeError) as e:
            raise InvalidRequestError(f"Invalid request: {e}") from e
        except RecursionError as e:
            raise InvalidRequestError("Invalid request: document nested too deeply") from e

        if not isinstance(data, dict):
            raise InvalidRequestError("Invalid request: expected a JSON object")

        try:
            return JsonRpcRequest.model_validate(data)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise InvalidRequestError(f"Invalid request: {errors}", data.get("id")) from e

    async def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Route a parsed request to its handler. Never raises."""
        try:
            method = Method(request.method)
        except ValueError:
            logger.warning("Unknown method", method=request.method)
            return JsonRpcResponse.success(request.id, None)

        bind_context(rpc_id=request.id, method=method.value)
        try:
            logger.debug("Dispatching request")
            result = await self._handlers[method](request.params)
        except ToolError as e:
            logger.warning("Tool call rejected", error=str(e))
            return JsonRpcResponse.failure(
                request.id, ErrorCode.INTERNAL_ERROR, f"Internal error: {e}"
            )
        except Exception as e:
            logger.error("Request failed", error=str(e), exc_info=True)
            return JsonRpcResponse.failure(
                request.id, ErrorCode.INTERNAL_ERROR, f"Internal error: {e}"
            )
        finally:
            clear_context()

        return JsonRpcResponse.success(request.id, result)

    async def handle(self, raw: Union[str, bytes]) -> str:
        """Parse, dispatch and serialize one request document. Never raises."""
        try:
            request = self.parse(raw)
        except InvalidRequestError as e:
            logger.warning("Invalid request", error=str(e))
            response = JsonRpcResponse.failure(e.request_id, ErrorCode.INVALID_REQUEST, str(e))
        else:
            response = await self.dispatch(request)

        return self.serialize(response)

    @staticmethod
    def serialize(response: JsonRpcResponse) -> str:
        return json.dumps(response.to_wire(), ensure_ascii=False)

    async def _initialize(self, params: Any) -> dict[str, Any]:
        return InitializeResult().model_dump()

    async def _tools_list(self, params: Any) -> dict[str, Any]:
        return {"tools": self.registry.descriptors()}

    async def _tools_call(self, params: Any) -> dict[str, Any]:
        if not isinstance(params, dict):
            raise ValueError("Missing params")

        call = ToolCallParams.model_validate(params)
        text = await self.registry.call(call.name, call.arguments)
        return CallToolResult.from_text(text).model_dump()
