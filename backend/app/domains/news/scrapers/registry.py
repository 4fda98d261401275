"""
Ordered registry of configured news sources.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from app.scrapers.config_loader import NewsConfig, SourceSpec


class SourceRegistry:
    """Immutable, ordered collection of source specs keyed by title."""

    def __init__(self, sources: Iterable[SourceSpec] = ()) -> None:
        self._sources: Tuple[SourceSpec, ...] = tuple(sources)

    @classmethod
    def from_config(cls, config: NewsConfig) -> "SourceRegistry":
        return cls(config.sources)

    def __iter__(self) -> Iterator[SourceSpec]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def categories(self) -> List[str]:
        return [source.title for source in self._sources]

    def get(self, title: str) -> Optional[SourceSpec]:
        for source in self._sources:
            if source.title == title:
                return source
        return None
