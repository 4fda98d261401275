"""
Single-slot TTL cache in front of the aggregation service.

The cached result is returned as-is while fresh, whatever ``days`` the
caller asks for; only TTL expiry or a forced refresh rebuilds it.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Optional

from loguru import logger

from app.core.exceptions import AggregateHardFailure
from app.domains.news.dtos import AggregateResult, CacheEntry

from .aggregation_service import NewsAggregationService


class NewsCacheService:
    """Process-wide holder of the most recent aggregation result."""

    def __init__(
        self,
        aggregator: NewsAggregationService,
        ttl_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._aggregator = aggregator
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[CacheEntry] = None
        self._lock = asyncio.Lock()

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def is_fresh(self) -> bool:
        if self._entry is None:
            return False
        return self._clock() - self._entry.stored_at < self._ttl_seconds

    async def get_or_refresh(self, force_refresh: bool, days: int) -> AggregateResult:
        async with self._lock:
            if not force_refresh and self.is_fresh():
                logger.info("Using cached news data")
                return self._entry.result

            previous = self._entry
            try:
                result = await self._aggregator.fetch_all(days)
            except Exception as exc:
                logger.error(f"News aggregation failed: {exc}")
                if previous is not None:
                    logger.warning("Returning previously cached news data as fallback")
                    return previous.result
                if isinstance(exc, AggregateHardFailure):
                    raise
                raise AggregateHardFailure(f"News aggregation failed: {exc}") from exc

            if result.is_total_failure:
                if previous is not None:
                    logger.warning(
                        "All sources failed; returning previously cached news data as fallback"
                    )
                    return previous.result
                raise AggregateHardFailure(
                    "All sources failed and no cached data is available",
                    errors=[error.to_dict() for error in result.errors or ()],
                )

            self._entry = CacheEntry(result=result, stored_at=self._clock())
            logger.info(f"News cache refreshed with {result.total} items")
            return result
