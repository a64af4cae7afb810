"""One ingestion run: load -> fetch -> merge -> save."""

from __future__ import annotations

import logging
import time
from typing import Optional

from cscserver.config import ScraperConfig
from cscserver.ingestion.merge import merge_records
from cscserver.ingestion.news_types import RunOutcome
from cscserver.ingestion.page_fetcher import PageFetcher, fetched_records
from cscserver.storage.news_store import NewsStore

logger = logging.getLogger(__name__)


class NewsPipeline:
    def __init__(
        self,
        config: ScraperConfig,
        store: Optional[NewsStore] = None,
        fetcher: Optional[PageFetcher] = None,
    ):
        self.config = config
        self.store = store or NewsStore(config)
        self.fetcher = fetcher or PageFetcher(config)

    def run(self) -> RunOutcome:
        started = time.time()
        logger.info("Starting news scraping process...")

        loaded = self.store.load()
        known = loaded.records
        logger.info(f"Loaded {len(known)} existing news items (source: {loaded.source})")

        results = self.fetcher.fetch_all()
        fetched = fetched_records(results)
        failed = [r for r in results if not r.ok]
        logger.info(f"Fetched {len(fetched)} news items from {len(results)} pages")
        if failed:
            logger.warning(f"{len(failed)} of {len(results)} pages failed: {', '.join(r.url for r in failed)}")

        merged = merge_records(known, fetched, dedupe_fetched=self.config.dedupe_fetched)
        logger.info(f"Found {merged.new_count} new news items")

        saved = self.store.save(merged.merged)
        if saved.remote_ok:
            logger.info(
                f"Successfully updated {len(merged.merged)} news items ({merged.new_count} new) "
                f"in {time.time() - started:.1f}s"
            )
        else:
            logger.warning("Updated local file only. Google Sheets update failed.")

        return RunOutcome(
            success=True,
            total=len(merged.merged),
            new=merged.new_count,
            store_updated=saved.remote_ok,
        )

    def run_safely(self) -> RunOutcome:
        """Run once; any escaping exception becomes a failed outcome."""
        try:
            return self.run()
        except Exception as e:
            logger.error(f"Error in scraping process: {e}", exc_info=True)
            return RunOutcome(success=False, error=str(e))
