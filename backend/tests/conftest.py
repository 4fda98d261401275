"""Shared test fixtures for backend tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_news_facade
from app.domains.news.facade import NewsFacade
from app.domains.news.scrapers import SourceRegistry
from app.domains.news.services import NewsAggregationService, NewsCacheService
from app.main import app as fastapi_app
from tests.utils.news_builders import FIXED_NOW, FakeExtractor, build_config, build_item


class ManualClock:
    """Monotonic clock stand-in advanced explicitly by tests."""

    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    today = FIXED_NOW.date()
    return FakeExtractor(
        {
            "Academic Affairs": [
                build_item("Academic Affairs", today, "Exam schedule"),
                build_item("Academic Affairs", today - timedelta(days=2), "Course selection"),
            ],
            "Library": [
                build_item("Library", today - timedelta(days=1), "Opening hours"),
            ],
        }
    )


@pytest.fixture
def news_facade(fake_extractor: FakeExtractor) -> NewsFacade:
    """Facade wired to canned sources and a fixed clock."""
    config = build_config("Academic Affairs", "Library", days=7)
    registry = SourceRegistry.from_config(config)
    aggregator = NewsAggregationService(registry, fake_extractor, now=lambda: FIXED_NOW)
    return NewsFacade(
        config=config,
        registry=registry,
        extractor=fake_extractor,
        aggregator=aggregator,
        cache=NewsCacheService(aggregator, ttl_seconds=config.interval_minutes * 60),
    )


@pytest_asyncio.fixture
async def test_app(news_facade: NewsFacade) -> AsyncGenerator[FastAPI, None]:
    """Provide FastAPI app with the news facade dependency overridden."""
    fastapi_app.dependency_overrides[get_news_facade] = lambda: news_facade

    yield fastapi_app

    fastapi_app.dependency_overrides.pop(get_news_facade, None)


@pytest_asyncio.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://testserver") as client:
        yield client
