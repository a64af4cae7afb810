"""Command line entry point for the news scraper."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from cscserver.config import ConfigurationError, ScraperConfig
from cscserver.ingestion.pipeline import NewsPipeline
from cscserver.ingestion.scheduler import NewsScheduler
from cscserver.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="news-scraper",
        description="Scrape FS-UMI news and sync them to a Google Sheet",
    )
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--once", "-o", action="store_true", help="Run the scraper a single time and exit")
    mode.add_argument("--schedule", "-s", action="store_true", help="Run now, then every SCRAPER_INTERVAL minutes")
    ap.add_argument("--pages", type=int, help="Override number of listing pages to fetch")
    ap.add_argument("--interval", type=int, help="Override schedule interval in minutes")
    return ap


def apply_overrides(config: ScraperConfig, args: argparse.Namespace) -> ScraperConfig:
    changes = {}
    if args.pages is not None and args.pages > 0:
        changes["pages_to_fetch"] = args.pages
    if args.interval is not None and args.interval > 0:
        changes["interval_minutes"] = args.interval
    return dataclasses.replace(config, **changes) if changes else config


def main(argv: Optional[List[str]] = None, env: Optional[Mapping[str, str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if env is None:
        load_dotenv()

    config = apply_overrides(ScraperConfig.from_env(env), args)
    configure_logging(config.log_path)

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(str(e))
        logger.info("Please set the following environment variables:")
        for name in e.missing:
            logger.info(f"  - {name}")
        return 1

    scheduler = NewsScheduler(NewsPipeline(config), config.interval_minutes)
    if args.schedule:
        scheduler.install_signal_handlers()
        return scheduler.run_forever()
    if not args.once:
        logger.info("Use --schedule or -s for continuous running, --once or -o for single run")
    return scheduler.run_once()
