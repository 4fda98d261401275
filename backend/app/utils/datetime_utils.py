from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

ITEM_DATE_FORMATS: Tuple[str, ...] = (
    "%Y/%m/%d",
    "%Y-%m-%d",
    "%Y.%m.%d",
    "%Y年%m月%d日",
)

ITEM_DATE_OUTPUT_FORMAT = "%Y-%m-%d"
UPDATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_item_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a listing date using the first strictly matching format.

    A format only matches when formatting the parsed value gives back the
    exact input, so "2024/3/5" or "2024-03-05 10:00" are rejected.
    """
    if not value:
        return None
    cleaned = value.strip()
    for fmt in ITEM_DATE_FORMATS:
        try:
            parsed = datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
        if parsed.strftime(fmt) == cleaned:
            return parsed
    return None


def format_item_date(value: date) -> str:
    return value.strftime(ITEM_DATE_OUTPUT_FORMAT)


def format_update_time(value: datetime) -> str:
    return value.strftime(UPDATE_TIME_FORMAT)


def format_iso_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def cutoff_date(days: int, now: datetime) -> date:
    """Start of the current day minus ``days``; items must be strictly newer."""
    return now.date() - timedelta(days=days)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
