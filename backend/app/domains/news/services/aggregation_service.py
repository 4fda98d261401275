"""
Service fanning out extraction across all configured sources.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable, List, Sequence, Union

from loguru import logger

from app.core.exceptions import SourceFetchError
from app.domains.news.dtos import AggregateResult, SourceError
from app.domains.news.scrapers import NewsItem, SourceExtractor, SourceRegistry
from app.utils.datetime_utils import cutoff_date, utc_now

Outcome = Union[List[NewsItem], BaseException]


class NewsAggregationService:
    """Runs one extraction per source concurrently and merges the outcomes."""

    def __init__(
        self,
        registry: SourceRegistry,
        extractor: SourceExtractor,
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._registry = registry
        self._extractor = extractor
        self._now = now

    async def fetch_all(self, days: int) -> AggregateResult:
        """
        Fetch every source, merge, sort newest first and keep the last ``days`` days.

        A failing source is reported in ``errors`` and never prevents the
        others from being included.
        """
        sources = list(self._registry)
        logger.info(f"Fetching {len(sources)} sources, days={days}")

        outcomes: Sequence[Outcome] = await asyncio.gather(
            *(self._extractor.extract(spec) for spec in sources),
            return_exceptions=True,
        )

        merged: List[NewsItem] = []
        errors: List[SourceError] = []
        for spec, outcome in zip(sources, outcomes):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                message = outcome.message if isinstance(outcome, SourceFetchError) else str(outcome)
                logger.error(f"{spec.title}: {message}")
                errors.append(SourceError(source=spec.title, error=message, timestamp=utc_now()))
                continue
            merged.extend(outcome)

        # list.sort is stable, so same-day items keep source order
        merged.sort(key=lambda item: item.date, reverse=True)

        now = self._now()
        cutoff = cutoff_date(days, now)
        filtered = tuple(item for item in merged if item.date > cutoff)

        result = AggregateResult(
            update_time=now,
            all_items=filtered,
            errors=tuple(errors) or None,
        )

        logger.info(f"Aggregation finished: {result.total} items, {len(errors)} errors")
        if errors:
            logger.warning(f"Failed sources: {', '.join(error.source for error in errors)}")
        return result
