"""
Scraper abstractions for the news domain.
"""

from .interfaces import NewsItem, SourceExtractor
from .registry import SourceRegistry

__all__ = [
    "NewsItem",
    "SourceExtractor",
    "SourceRegistry",
]
