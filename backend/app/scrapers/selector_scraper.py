"""
Selector-driven scraper for listing pages described by a SourceSpec.

Each source is fetched with a single GET request. Elements matching the
source's item selector are turned into news items one by one; a malformed
element is skipped without affecting the rest of the page.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, Tag
from loguru import logger

from app.core.config import settings
from app.core.exceptions import ItemParseError, SourceFetchError
from app.domains.news.scrapers.interfaces import NewsItem
from app.scrapers.config_loader import SourceSpec
from app.utils.datetime_utils import parse_item_date


class SelectorScraper:
    """Fetches one source page and extracts news items via CSS selectors."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.timeout = timeout or settings.SCRAPER_TIMEOUT
        self.session = client or httpx.AsyncClient(
            headers={"User-Agent": settings.SCRAPER_USER_AGENT},
            timeout=self.timeout,
            follow_redirects=True,
            max_redirects=settings.SCRAPER_MAX_REDIRECTS,
            verify=settings.SCRAPER_VERIFY_TLS,
        )

    async def extract(self, spec: SourceSpec) -> List[NewsItem]:
        """
        Fetch ``spec.url`` and return every item that could be built.

        Raises:
            SourceFetchError: network failure or HTTP status >= 400.
        """
        url = str(spec.url)
        logger.info(f"Fetching {spec.title} from {url}")

        html = await self._fetch(spec, url)
        items = self.parse_items(spec, html)

        if items:
            logger.info(f"{spec.title} done, extracted {len(items)} items")
        else:
            logger.warning(f"{spec.title} returned no valid items")
        return items

    async def _fetch(self, spec: SourceSpec, url: str) -> str:
        try:
            # httpx timeouts are per phase; bound the whole exchange as well
            response = await asyncio.wait_for(
                self.session.get(url, headers=spec.headers or None),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            message = f"timed out after {self.timeout:g}s"
            logger.error(f"{spec.title} fetch failed: {message}")
            raise SourceFetchError(spec.title, f"Fetch failed ({message})") from exc
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            message = str(exc) or exc.__class__.__name__
            logger.error(f"{spec.title} fetch failed: {message}")
            raise SourceFetchError(spec.title, f"Fetch failed ({message})") from exc

        if response.status_code >= 400:
            message = f"HTTP status: {response.status_code} - {response.reason_phrase or ''}".rstrip(" -")
            logger.error(f"{spec.title} fetch failed: {message}")
            raise SourceFetchError(spec.title, f"Fetch failed ({message})")

        return response.text

    def parse_items(self, spec: SourceSpec, html: str) -> List[NewsItem]:
        soup = BeautifulSoup(html, "html.parser")
        items: List[NewsItem] = []

        for element in soup.select(spec.item_selector):
            try:
                items.append(self._build_item(spec, element))
            except ItemParseError as exc:
                logger.warning(f"Skipping item from {spec.title}: {exc.message}")
            except Exception as exc:
                logger.error(f"Error while processing an item from {spec.title}: {exc}")

        return items

    def _build_item(self, spec: SourceSpec, element: Tag) -> NewsItem:
        date_element = element.select_one(spec.date_selector)
        if date_element is None:
            raise ItemParseError("date element not found")

        date_text = date_element.get_text().strip()
        item_date = parse_item_date(date_text)
        if item_date is None:
            raise ItemParseError(f"invalid date format: {date_text!r}")

        title_element = element.select_one(spec.title_selector)
        href_element = element.select_one(spec.href_selector)
        if title_element is None or href_element is None:
            raise ItemParseError("title or link element not found")

        href = href_element.get("href")
        if not href:
            raise ItemParseError("link element has no href")

        title = title_element.get("title") or title_element.get_text().strip()

        return NewsItem(
            source=spec.title,
            title=str(title),
            url=urljoin(str(spec.url), str(href).strip()),
            date=item_date,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.session.aclose()
