"""Shared models, configuration and logging for the Zendesk MCP Server."""

from shared.models import (
    Article,
    ArticleSummary,
    ErrorCode,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolDefinition,
    ToolParameter,
)
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "Article",
    "ArticleSummary",
    "ErrorCode",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "ToolDefinition",
    "ToolParameter",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
