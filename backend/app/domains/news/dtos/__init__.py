from .aggregate import AggregateResult, CacheEntry, SourceError

__all__ = ["AggregateResult", "CacheEntry", "SourceError"]
