"""
News endpoints: categories, cached listing and forced refresh
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from loguru import logger

from app.api.dependencies import get_news_facade
from app.core.exceptions import ValidationError
from app.domains.news.facade import NewsFacade

router = APIRouter(prefix="/news", tags=["news"])

MIN_DAYS = 1
MAX_DAYS = 90


def parse_days(raw: Optional[str]) -> Optional[int]:
    """Validate the ``days`` query parameter; None means use the configured default."""
    if raw is None or raw.strip() == "":
        return None
    try:
        days = int(raw.strip())
    except ValueError:
        raise ValidationError(
            f"days must be an integer between {MIN_DAYS} and {MAX_DAYS}",
            field="days",
        )
    if not MIN_DAYS <= days <= MAX_DAYS:
        raise ValidationError(
            f"days must be an integer between {MIN_DAYS} and {MAX_DAYS}",
            field="days",
        )
    return days


@router.get("/categories", response_model=List[str])
async def get_categories(facade: NewsFacade = Depends(get_news_facade)):
    categories = facade.categories()
    logger.info(f"Returning {len(categories)} categories")
    return categories


@router.get("/refresh", response_model=Dict[str, Any])
async def refresh_news(facade: NewsFacade = Depends(get_news_facade)):
    logger.info("Forced refresh requested")
    result = await facade.refresh()
    logger.info(f"Refresh complete, {result.total} items")
    return result.to_dict()


@router.get("", response_model=Dict[str, Any])
async def get_news(
    category: Optional[str] = Query(default=None, description="Source title or 'all'"),
    days: Optional[str] = Query(default=None, description="Day window, 1-90"),
    facade: NewsFacade = Depends(get_news_facade),
):
    days_value = parse_days(days)
    logger.info(
        f"News request: category={category or 'all'}, days={days_value or facade.default_days}"
    )
    result = await facade.get_news(category=category, days=days_value)
    return result.to_dict()
