"""Listing page fetch + parse for the FS-UMI news site.

Policy:
- Pages are fetched one at a time with a fixed politeness delay between them.
- A failing page is logged and yields zero records; it never aborts the run.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

import requests
from bs4 import BeautifulSoup

from cscserver.config import ScraperConfig
from cscserver.ingestion.news_types import NewsRecord, PageFetchResult

logger = logging.getLogger(__name__)


ARTICLE_SELECTOR = "article"
TITLE_LINK_SELECTOR = "h2.blog-entry-title a"
DATE_SELECTOR = "time.entry-date"
IMAGE_SELECTOR = ".nv-post-thumbnail-wrap img"
CATEGORY_SELECTOR = ".meta.category a"


def page_url(base_url: str, page: int) -> str:
    """Page 1 is the bare listing URL; later pages use the WordPress ``page/{n}/`` suffix."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page == 1:
        return base_url
    base = base_url if base_url.endswith("/") else base_url + "/"
    return f"{base}page/{page}/"


def absolute_link(link: str, base_origin: str) -> str:
    if link.startswith("http"):
        return link
    if not link.startswith("/"):
        link = "/" + link
    return base_origin.rstrip("/") + link


def parse_listing(html: str, base_origin: str) -> List[NewsRecord]:
    """Extract news records from one listing page.

    Articles without both a title and a link are dropped.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    out: List[NewsRecord] = []
    for el in soup.select(ARTICLE_SELECTOR):
        anchor = el.select_one(TITLE_LINK_SELECTOR)
        title = anchor.get_text(strip=True) if anchor else ""
        link = (anchor.get("href") or "").strip() if anchor else ""
        if not title or not link:
            continue

        time_el = el.select_one(DATE_SELECTOR)
        date = time_el.get_text(strip=True) if time_el else ""

        img = el.select_one(IMAGE_SELECTOR)
        image_url = None
        if img is not None:
            image_url = (img.get("src") or "").strip() or None

        categories = tuple(
            label
            for label in (c.get_text(strip=True) for c in el.select(CATEGORY_SELECTOR))
            if label
        )

        out.append(
            NewsRecord(
                title=title,
                date=date,
                link=absolute_link(link, base_origin),
                image_url=image_url,
                categories=categories,
            )
        )
    return out


class PageFetcher:
    def __init__(
        self,
        config: ScraperConfig,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.sleep = sleep

    def fetch_page(self, url: str) -> PageFetchResult:
        logger.info(f"Fetching page: {url}")
        try:
            resp = self.session.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.request_timeout,
            )
            resp.raise_for_status()
            records = parse_listing(resp.text, self.config.base_origin)
        except Exception as e:
            logger.error(f"Error fetching page {url}: {e}")
            return PageFetchResult(url=url, records=[], error=str(e))
        logger.info(f"Found {len(records)} news items on page")
        return PageFetchResult(url=url, records=records)

    def fetch_all(self) -> List[PageFetchResult]:
        pages = self.config.pages_to_fetch
        results: List[PageFetchResult] = []
        for page in range(1, pages + 1):
            results.append(self.fetch_page(page_url(self.config.base_url, page)))
            if page < pages and self.config.request_delay_seconds > 0:
                self.sleep(self.config.request_delay_seconds)
        return results


def fetched_records(results: List[PageFetchResult]) -> List[NewsRecord]:
    out: List[NewsRecord] = []
    for r in results:
        out.extend(r.records)
    return out
