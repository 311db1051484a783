"""Zendesk Help Center integration.

Contains the API client, the TTL cache and caching facade in front of it,
and the MCP tools backed by them.
"""

from zendesk.cache import TTLCache
from zendesk.client import (
    ArticleNotFoundError,
    ZendeskAPIError,
    ZendeskClient,
    ZendeskConnectionError,
    ZendeskError,
)
from zendesk.facade import CachingZendeskClient
from zendesk.tools import register_zendesk_tools

__all__ = [
    "TTLCache",
    "ArticleNotFoundError",
    "ZendeskAPIError",
    "ZendeskClient",
    "ZendeskConnectionError",
    "ZendeskError",
    "CachingZendeskClient",
    "register_zendesk_tools",
]
