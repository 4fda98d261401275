from __future__ import annotations

import asyncio
from typing import List

import pytest

from app.core.exceptions import AggregateHardFailure
from app.domains.news.dtos import AggregateResult, SourceError
from app.domains.news.services.cache_service import NewsCacheService
from tests.utils.news_builders import FIXED_NOW, build_item, build_result

TTL = 30 * 60


class StubAggregator:
    """Returns queued results (or raises queued exceptions) and records the requested windows."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: List[int] = []

    async def fetch_all(self, days: int) -> AggregateResult:
        self.calls.append(days)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _total_failure() -> AggregateResult:
    return build_result(errors=[SourceError(source="A", error="Fetch failed", timestamp=FIXED_NOW)])


@pytest.mark.asyncio
async def test_fresh_entry_is_served_regardless_of_days(clock):
    first = build_result(build_item("A", FIXED_NOW.date()))
    aggregator = StubAggregator(first)
    cache = NewsCacheService(aggregator, TTL, clock=clock)

    built = await cache.get_or_refresh(False, 7)
    clock.advance(TTL - 1)
    served = await cache.get_or_refresh(False, 30)

    assert served is built
    assert aggregator.calls == [7]


@pytest.mark.asyncio
async def test_expired_entry_triggers_refresh(clock):
    first = build_result(build_item("A", FIXED_NOW.date(), "first"))
    second = build_result(build_item("A", FIXED_NOW.date(), "second"))
    aggregator = StubAggregator(first, second)
    cache = NewsCacheService(aggregator, TTL, clock=clock)

    await cache.get_or_refresh(False, 7)
    clock.advance(TTL)
    served = await cache.get_or_refresh(False, 14)

    assert served is second
    assert aggregator.calls == [7, 14]
    assert cache.entry.result is second


@pytest.mark.asyncio
async def test_force_refresh_bypasses_ttl(clock):
    first = build_result(build_item("A", FIXED_NOW.date(), "first"))
    second = build_result(build_item("A", FIXED_NOW.date(), "second"))
    aggregator = StubAggregator(first, second)
    cache = NewsCacheService(aggregator, TTL, clock=clock)

    await cache.get_or_refresh(False, 3)
    served = await cache.get_or_refresh(True, 3)

    assert served is second
    assert len(aggregator.calls) == 2


@pytest.mark.asyncio
async def test_partial_failure_result_replaces_cache(clock):
    first = build_result(build_item("A", FIXED_NOW.date(), "first"))
    partial = build_result(
        build_item("A", FIXED_NOW.date(), "partial"),
        errors=[SourceError(source="B", error="Fetch failed", timestamp=FIXED_NOW)],
    )
    aggregator = StubAggregator(first, partial)
    cache = NewsCacheService(aggregator, TTL, clock=clock)

    await cache.get_or_refresh(False, 3)
    served = await cache.get_or_refresh(True, 3)

    assert served is partial
    assert cache.entry.result is partial


@pytest.mark.asyncio
async def test_aggregator_exception_falls_back_to_previous_entry(clock):
    first = build_result(build_item("A", FIXED_NOW.date()))
    aggregator = StubAggregator(first, RuntimeError("event loop hiccup"))
    cache = NewsCacheService(aggregator, TTL, clock=clock)

    await cache.get_or_refresh(False, 3)
    served = await cache.get_or_refresh(True, 3)

    assert served is first
    assert cache.entry.result is first


@pytest.mark.asyncio
async def test_aggregator_exception_without_entry_is_hard_failure(clock):
    cache = NewsCacheService(StubAggregator(RuntimeError("boom")), TTL, clock=clock)

    with pytest.raises(AggregateHardFailure):
        await cache.get_or_refresh(False, 3)
    assert cache.entry is None


@pytest.mark.asyncio
async def test_total_failure_falls_back_to_previous_entry(clock):
    first = build_result(build_item("A", FIXED_NOW.date()))
    aggregator = StubAggregator(first, _total_failure())
    cache = NewsCacheService(aggregator, TTL, clock=clock)

    await cache.get_or_refresh(False, 3)
    served = await cache.get_or_refresh(True, 3)

    assert served is first


@pytest.mark.asyncio
async def test_total_failure_without_entry_raises_with_errors(clock):
    cache = NewsCacheService(StubAggregator(_total_failure()), TTL, clock=clock)

    with pytest.raises(AggregateHardFailure) as exc_info:
        await cache.get_or_refresh(True, 3)

    assert exc_info.value.errors[0]["source"] == "A"


@pytest.mark.asyncio
async def test_concurrent_reads_share_one_refresh(clock):
    first = build_result(build_item("A", FIXED_NOW.date()))
    aggregator = StubAggregator(first)
    cache = NewsCacheService(aggregator, TTL, clock=clock)

    results = await asyncio.gather(*(cache.get_or_refresh(False, 3) for _ in range(5)))

    assert all(result is first for result in results)
    assert aggregator.calls == [3]
