"""Run modes for the news pipeline: once, or immediately then every N minutes."""

from __future__ import annotations

import json
import logging
import signal
import threading
import time
from typing import Callable, Optional

import schedule

from cscserver.ingestion.news_types import RunOutcome
from cscserver.ingestion.pipeline import NewsPipeline

logger = logging.getLogger(__name__)


class NewsScheduler:
    def __init__(
        self,
        pipeline: NewsPipeline,
        interval_minutes: int,
        scheduler: Optional[schedule.Scheduler] = None,
        sleep: Callable[[float], None] = time.sleep,
        poll_seconds: float = 5.0,
    ):
        self.pipeline = pipeline
        self.interval_minutes = interval_minutes
        # Private instance so the gateway can host this loop next to other jobs.
        self.scheduler = scheduler or schedule.Scheduler()
        self.sleep = sleep
        self.poll_seconds = poll_seconds
        self._shutdown = threading.Event()

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown.is_set()

    def request_shutdown(self) -> None:
        self._shutdown.set()

    def install_signal_handlers(self) -> None:
        """Stop the loop on SIGINT/SIGTERM. Must be called from the main thread."""
        def signal_handler(signum, frame):
            name = signal.Signals(signum).name
            logger.info(f"Received {name}, shutting down gracefully...")
            self.request_shutdown()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def _run(self) -> RunOutcome:
        outcome = self.pipeline.run_safely()
        logger.info(f"Run outcome: {json.dumps(outcome.to_dict())}")
        return outcome

    def run_once(self) -> int:
        logger.info("Running news scraper once...")
        outcome = self._run()
        if outcome.success:
            logger.info(f"Scraping completed successfully! Total: {outcome.total}, New: {outcome.new}")
            return 0
        logger.error(f"Scraping failed: {outcome.error}")
        return 1

    def _scheduled_job(self) -> None:
        logger.info("Scheduled run starting...")
        outcome = self._run()
        if not outcome.success:
            logger.error(f"Scheduled run failed: {outcome.error}")

    def run_forever(self) -> int:
        logger.info(f"Starting scheduled scraper (every {self.interval_minutes} minutes)...")
        self._run()

        # schedule computes the next run after the job returns, so runs never overlap.
        self.scheduler.every(self.interval_minutes).minutes.do(self._scheduled_job)
        while not self.shutdown_requested:
            self.scheduler.run_pending()
            self.sleep(self.poll_seconds)

        self.scheduler.clear()
        logger.info("Scheduler stopped")
        return 0
