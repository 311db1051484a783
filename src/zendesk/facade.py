"""Caching facade in front of the Zendesk client.

Each operation has its own key scheme and TTL, chosen by how quickly the
underlying data changes: single articles rarely change, listings often do.
"""

from typing import Optional

from shared.config import CacheSettings
from shared.logging import get_logger
from shared.models import Article, ArticleSummary
from zendesk.cache import TTLCache
from zendesk.client import ZendeskClient

logger = get_logger(__name__)


def search_key(query: str, limit: int) -> str:
    return f"search:{query.lower()}:{limit}"


def article_key(article_id: str) -> str:
    return f"article:{article_id}"


def list_key(limit: int) -> str:
    return f"list:{limit}"


class CachingZendeskClient:
    """
    Read-through cache over ZendeskClient.

    Exposes the same three operations as the client. Search keys are
    lowercased so queries differing only in case share an entry; the
    upstream request keeps the caller's casing.
    """

    def __init__(
        self,
        client: ZendeskClient,
        cache: Optional[TTLCache] = None,
        settings: Optional[CacheSettings] = None
    ) -> None:
        self.client = client
        self.cache = cache or TTLCache()
        self.settings = settings or CacheSettings()

    async def search_articles(self, query: str, limit: int = 10) -> list[ArticleSummary]:
        return await self.cache.get(
            search_key(query, limit),
            self.settings.search_ttl_seconds,
            lambda: self.client.search_articles(query, limit),
        )

    async def get_article(self, article_id: str) -> Article:
        return await self.cache.get(
            article_key(article_id),
            self.settings.article_ttl_seconds,
            lambda: self.client.get_article(article_id),
        )

    async def list_articles(self, limit: int = 30) -> list[Article]:
        return await self.cache.get(
            list_key(limit),
            self.settings.list_ttl_seconds,
            lambda: self.client.list_articles(limit),
        )

    async def close(self) -> None:
        logger.info("Closing Zendesk client", cache=self.cache.stats())
        self.cache.clear()
        await self.client.close()
