"""
News domain package.

Provides the source registry, the aggregation and cache services and the
facade used by the API layer. Concrete implementations live in subpackages;
import the facade from ``app.domains.news.facade``.
"""
