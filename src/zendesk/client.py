"""Zendesk Help Center API client.

Issues exactly one HTTP request per operation. Failures are mapped to
ZendeskError subclasses; nothing is retried.
"""

from typing import Any, Optional

import httpx

from shared.config import ZendeskSettings
from shared.logging import get_logger
from shared.models import Article, ArticleSummary

logger = get_logger(__name__)

ARTICLES_PATH = "/api/v2/help_center/articles"


class ZendeskError(Exception):
    """Base exception for Zendesk API errors."""
    pass


class ZendeskConnectionError(ZendeskError):
    """The Zendesk API could not be reached."""
    pass


class ZendeskAPIError(ZendeskError):
    """The Zendesk API answered with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ArticleNotFoundError(ZendeskError):
    """The requested article does not exist."""

    def __init__(self, article_id: str) -> None:
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class ZendeskClient:
    """
    Async client for the Zendesk Help Center articles API.

    Authenticates with an API token using HTTP basic auth
    (``{email}/token`` as the user name).
    """

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        """
        Initialize the Zendesk client.

        Args:
            base_url: API base URL, e.g. https://acme.zendesk.com
            email: Agent email address
            api_token: Zendesk API token
            timeout: Request timeout in seconds; None disables it
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(f"{email}/token", api_token),
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: ZendeskSettings) -> "ZendeskClient":
        """Create a client from Zendesk settings."""
        return cls(
            base_url=settings.resolved_base_url,
            email=settings.email,
            api_token=settings.api_token,
            timeout=settings.timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ZendeskClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Send one GET request and return the decoded JSON body."""
        logger.debug("Zendesk request", path=path, params=params)

        try:
            response = await self._client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error("Zendesk request failed", path=path, error=str(e))
            raise ZendeskConnectionError(f"Cannot connect to Zendesk: {e}") from e

        if response.is_error:
            logger.error(
                "Zendesk returned an error",
                path=path,
                status_code=response.status_code
            )
            raise ZendeskAPIError(
                f"Zendesk API request to {response.request.url} failed "
                f"with status {response.status_code}",
                status_code=response.status_code,
            )

        return response.json() or {}

    async def search_articles(self, query: str, limit: int = 10) -> list[ArticleSummary]:
        """Search Help Center articles by query string."""
        data = await self._get(
            f"{ARTICLES_PATH}/search.json",
            params={"query": query, "per_page": limit},
        )
        return [ArticleSummary.model_validate(item) for item in data.get("results") or []]

    async def get_article(self, article_id: str) -> Article:
        """
        Get a single article by ID.

        Raises:
            ArticleNotFoundError: If Zendesk has no such article
        """
        try:
            data = await self._get(f"{ARTICLES_PATH}/{article_id}.json")
        except ZendeskAPIError as e:
            if e.status_code == 404:
                raise ArticleNotFoundError(article_id) from e
            raise

        article = data.get("article")
        if not article:
            raise ArticleNotFoundError(article_id)
        return Article.model_validate(article)

    async def list_articles(self, limit: int = 30) -> list[Article]:
        """List articles in the Help Center."""
        data = await self._get(f"{ARTICLES_PATH}.json", params={"per_page": limit})
        return [Article.model_validate(item) for item in data.get("articles") or []]
