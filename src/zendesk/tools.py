"""Zendesk Help Center tools.

Defines the three tools exposed over MCP and registers their handlers,
which delegate to the caching Zendesk client.
"""

from typing import TYPE_CHECKING

from shared.logging import get_logger
from shared.models import (
    Article,
    ArticleSummary,
    GetArticleArguments,
    ListArticlesArguments,
    SearchArticlesArguments,
    ToolDefinition,
    ToolParameter,
)
from zendesk.facade import CachingZendeskClient

if TYPE_CHECKING:
    from mcp_server.registry import ToolRegistry

logger = get_logger(__name__)


SEARCH_ARTICLES = ToolDefinition(
    name="search_articles",
    description="Search Zendesk Help Center articles by query string",
    parameters=[
        ToolParameter(
            name="query",
            type="string",
            description="Search query for articles",
        ),
        ToolParameter(
            name="limit",
            type="integer",
            description="Maximum number of results (default: 10)",
            required=False,
            default=10,
        ),
    ],
)

GET_ARTICLE = ToolDefinition(
    name="get_article",
    description="Get a specific Zendesk article by ID",
    parameters=[
        ToolParameter(
            name="article_id",
            type="string",
            description="The article ID",
        ),
    ],
)

LIST_ARTICLES = ToolDefinition(
    name="list_articles",
    description="List all articles in the Help Center",
    parameters=[
        ToolParameter(
            name="limit",
            type="integer",
            description="Maximum number of results (default: 30)",
            required=False,
            default=30,
        ),
    ],
)

ZENDESK_TOOLS = [SEARCH_ARTICLES, GET_ARTICLE, LIST_ARTICLES]


def register_zendesk_tools(registry: "ToolRegistry", api: CachingZendeskClient) -> None:
    """Register the Help Center tools, backed by the given client."""

    async def search_articles(args: SearchArticlesArguments) -> list[ArticleSummary]:
        return await api.search_articles(args.query, args.limit)

    async def get_article(args: GetArticleArguments) -> Article:
        return await api.get_article(args.article_id)

    async def list_articles(args: ListArticlesArguments) -> list[Article]:
        return await api.list_articles(args.limit)

    registry.register(SEARCH_ARTICLES, SearchArticlesArguments, search_articles)
    registry.register(GET_ARTICLE, GetArticleArguments, get_article)
    registry.register(LIST_ARTICLES, ListArticlesArguments, list_articles)

    logger.info("Zendesk tools registered", tool_count=len(ZENDESK_TOOLS))
