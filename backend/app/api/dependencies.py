"""
API dependencies
"""

from fastapi import Request

from app.core.exceptions import ServiceUnavailableError
from app.domains.news.facade import NewsFacade


def get_news_facade(request: Request) -> NewsFacade:
    """
    Return the news facade built during application startup.

    Raises:
        ServiceUnavailableError: If startup has not finished initializing the facade
    """
    facade = getattr(request.app.state, "news_facade", None)
    if facade is None:
        raise ServiceUnavailableError("News service is not initialized")
    return facade
