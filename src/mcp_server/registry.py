"""Tool Registry for the MCP Server.

Maps tool names to their definitions, argument models and handlers.
Arguments are validated against the tool's contract before the handler
runs, and handler results are rendered as indented JSON text.
"""

import json
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, ValidationError

from shared.logging import get_logger
from shared.models import ToolDefinition
from shared.schema import missing_required, validate_schema

logger = get_logger(__name__)

ToolHandler = Callable[[Any], Awaitable[Any]]


class ToolError(Exception):
    """Base exception for tool lookup and argument errors."""
    pass


class UnknownToolError(ToolError):
    """No tool is registered under the requested name."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class MissingArgumentError(ToolError):
    """A required argument is absent."""

    def __init__(self, tool_name: str, argument: str) -> None:
        super().__init__(f"Missing required argument '{argument}' for tool '{tool_name}'")
        self.tool_name = tool_name
        self.argument = argument


class InvalidArgumentError(ToolError):
    """An argument is present but does not match the tool's schema."""

    def __init__(self, tool_name: str, errors: list[str]) -> None:
        super().__init__(f"Invalid arguments for tool '{tool_name}': {'; '.join(errors)}")
        self.tool_name = tool_name
        self.errors = errors


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    arguments_model: type[BaseModel]
    handler: ToolHandler


def render_text(data: Any) -> str:
    """Render a handler result as indented JSON text."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    elif isinstance(data, list):
        data = [
            item.model_dump(mode="json") if isinstance(item, BaseModel) else item
            for item in data
        ]
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


class ToolRegistry:
    """
    Registry of the tools this server exposes.

    Responsibilities:
    - Register tools with their argument contracts
    - List tool descriptors for tools/list
    - Validate arguments and invoke handlers for tools/call
    """

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(
        self,
        definition: ToolDefinition,
        arguments_model: type[BaseModel],
        handler: ToolHandler
    ) -> None:
        """
        Register a tool.

        Args:
            definition: Tool definition advertised to clients
            arguments_model: Pydantic model the validated arguments are parsed into
            handler: Coroutine function receiving the parsed arguments

        Raises:
            ValueError: If the tool name is already registered
        """
        if definition.name in self._tools:
            raise ValueError(f"Tool '{definition.name}' is already registered")

        self._tools[definition.name] = RegisteredTool(definition, arguments_model, handler)
        logger.info("Tool registered", tool=definition.name)

    def get(self, tool_name: str) -> Optional[ToolDefinition]:
        """Get a tool definition by name."""
        tool = self._tools.get(tool_name)
        return tool.definition if tool else None

    def list_tools(self) -> list[ToolDefinition]:
        """List tool definitions in registration order."""
        return [tool.definition for tool in self._tools.values()]

    def descriptors(self) -> list[dict[str, Any]]:
        """List tools in the shape returned by tools/list."""
        return [definition.to_descriptor() for definition in self.list_tools()]

    def validate_input(self, tool_name: str, arguments: dict[str, Any]) -> BaseModel:
        """
        Validate arguments against a tool's contract.

        Required fields are checked first so a missing field is always
        reported by name, then types, then the arguments model.

        Returns:
            The parsed arguments model

        Raises:
            UnknownToolError: If the tool is not registered
            MissingArgumentError: If a required argument is absent
            InvalidArgumentError: If an argument has the wrong type
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            raise UnknownToolError(tool_name)

        schema = tool.definition.input_schema
        missing = missing_required(arguments, schema)
        if missing:
            raise MissingArgumentError(tool_name, missing[0])

        is_valid, errors = validate_schema(arguments, schema)
        if not is_valid:
            raise InvalidArgumentError(tool_name, errors)

        try:
            return tool.arguments_model.model_validate(arguments)
        except ValidationError as e:
            raise InvalidArgumentError(
                tool_name,
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            ) from e

    async def call(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """
        Execute a tool and return its output as text.

        Raises:
            ToolError: For unknown tools or bad arguments
            Exception: Whatever the handler raises, unchanged
        """
        parsed = self.validate_input(tool_name, arguments)
        tool = self._tools[tool_name]

        start_time = time.perf_counter()
        result = await tool.handler(parsed)
        logger.debug(
            "Tool executed",
            tool=tool_name,
            execution_time_ms=round((time.perf_counter() - start_time) * 1000, 2)
        )

        return render_text(result)
