from .aggregation_service import NewsAggregationService
from .cache_service import NewsCacheService

__all__ = ["NewsAggregationService", "NewsCacheService"]
