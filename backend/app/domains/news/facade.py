"""
News domain facade.

The facade provides a stable entry point for the API layer: it owns the
source registry, the scraper, the aggregation service and the cache, and
exposes the three read operations the endpoints need.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from app.core.config import settings
from app.scrapers.config_loader import NewsConfig
from app.scrapers.selector_scraper import SelectorScraper
from app.utils.snapshots import persist_result

from .dtos import AggregateResult
from .scrapers import SourceExtractor, SourceRegistry
from .services.aggregation_service import NewsAggregationService
from .services.cache_service import NewsCacheService

ALL_CATEGORIES = "all"


@dataclass
class NewsFacade:
    """Facade coordinating the registry, aggregation and cache services."""

    config: NewsConfig
    registry: SourceRegistry
    extractor: SourceExtractor
    aggregator: NewsAggregationService
    cache: NewsCacheService
    output_path: Optional[str] = None

    @property
    def default_days(self) -> int:
        return self.config.days

    def categories(self) -> List[str]:
        return self.registry.categories()

    async def get_news(
        self,
        *,
        category: Optional[str] = None,
        days: Optional[int] = None,
    ) -> AggregateResult:
        result = await self.cache.get_or_refresh(False, days or self.default_days)
        if category and category != ALL_CATEGORIES:
            if self.registry.get(category) is None:
                logger.warning(f"Unknown category requested: {category}")
            before = result.total
            result = result.only_source(category)
            logger.info(f"Category filter {category}: {before} -> {result.total} items")
        await self._persist(result)
        return result

    async def refresh(self) -> AggregateResult:
        result = await self.cache.get_or_refresh(True, self.default_days)
        await self._persist(result)
        return result

    async def _persist(self, result: AggregateResult) -> None:
        if self.output_path:
            await asyncio.to_thread(persist_result, result, self.output_path)

    async def close(self) -> None:
        await self.extractor.close()


def build_news_facade(
    config: NewsConfig,
    *,
    extractor: Optional[SourceExtractor] = None,
) -> NewsFacade:
    """Wire the news services together from a validated configuration."""
    registry = SourceRegistry.from_config(config)
    extractor = extractor or SelectorScraper()
    aggregator = NewsAggregationService(registry, extractor)
    cache = NewsCacheService(aggregator, ttl_seconds=config.interval_minutes * 60)
    return NewsFacade(
        config=config,
        registry=registry,
        extractor=extractor,
        aggregator=aggregator,
        cache=cache,
        output_path=config.output_path or settings.NEWS_OUTPUT_PATH,
    )
