"""Shared fixtures for the test suite."""

import os
from unittest.mock import AsyncMock, Mock

import pytest

from shared.models import Article, ArticleSummary


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_article(article_id: int = 999, title: str = "Resetting your password") -> Article:
    return Article(
        id=article_id,
        title=title,
        body="<p>Click <em>Forgot password</em>.</p>",
        url=f"https://acme.zendesk.com/api/v2/help_center/articles/{article_id}.json",
        html_url=f"https://acme.zendesk.com/hc/articles/{article_id}",
        section_id=42,
    )


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the developer's environment and .env file out of the settings."""
    for name in list(os.environ):
        if name.startswith(("ZENDESK_", "MCP_")) or name == "PORT":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def zendesk_client() -> Mock:
    """A stand-in ZendeskClient whose operations are AsyncMocks."""
    client = Mock()
    client.search_articles = AsyncMock(return_value=[
        ArticleSummary(id=1, title="Password reset", snippet="reset your <em>password</em>"),
    ])
    client.get_article = AsyncMock(return_value=make_article())
    client.list_articles = AsyncMock(return_value=[make_article(1), make_article(2)])
    client.close = AsyncMock()
    return client
