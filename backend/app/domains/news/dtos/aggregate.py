from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from app.domains.news.scrapers.interfaces import NewsItem
from app.utils.datetime_utils import (
    format_iso_timestamp,
    format_item_date,
    format_update_time,
)


@dataclass(frozen=True)
class SourceError:
    source: str
    error: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "error": self.error,
            "timestamp": format_iso_timestamp(self.timestamp),
        }


@dataclass(frozen=True)
class AggregateResult:
    """
    Merged, sorted and date-filtered output of one aggregation run.

    ``errors`` is None (not an empty tuple) when no source failed, and the
    serialized form then has neither ``errors`` nor ``partialSuccess``.
    """

    update_time: datetime
    all_items: Tuple[NewsItem, ...]
    errors: Optional[Tuple[SourceError, ...]] = None

    @property
    def total(self) -> int:
        return len(self.all_items)

    @property
    def partial_success(self) -> Optional[bool]:
        if not self.errors:
            return None
        return self.total > 0

    @property
    def is_total_failure(self) -> bool:
        return bool(self.errors) and self.total == 0

    def only_source(self, source: str) -> "AggregateResult":
        """Copy restricted to the items of one source."""
        return replace(
            self,
            all_items=tuple(item for item in self.all_items if item.source == source),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "updateTime": format_update_time(self.update_time),
            "total": self.total,
            "allItems": [
                {
                    "source": item.source,
                    "title": item.title,
                    "url": item.url,
                    "date": format_item_date(item.date),
                }
                for item in self.all_items
            ],
        }
        if self.errors:
            data["errors"] = [error.to_dict() for error in self.errors]
            data["partialSuccess"] = self.partial_success
        return data


@dataclass(frozen=True)
class CacheEntry:
    result: AggregateResult
    # monotonic clock reading taken when the result was stored
    stored_at: float
