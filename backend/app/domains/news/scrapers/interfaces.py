"""
Shared interfaces for news scrapers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, List, Protocol

if TYPE_CHECKING:
    from app.scrapers.config_loader import SourceSpec


@dataclass(frozen=True, slots=True)
class NewsItem:
    """Normalized item extracted from one source listing."""

    source: str
    title: str
    url: str
    date: date


class SourceExtractor(Protocol):
    """Interface for anything able to turn a SourceSpec into news items."""

    async def extract(self, spec: "SourceSpec") -> List[NewsItem]:
        """Return the items of one source or raise SourceFetchError."""
        ...

    async def close(self) -> None:
        ...
