#!/usr/bin/env python3
"""
CSC API gateway.
Authenticated email endpoints plus, when Google credentials are present,
the FS-UMI news scraper running on a background schedule.
"""

import logging
import os
import threading

from dotenv import load_dotenv

from cscserver.api.gateway import create_app
from cscserver.api.netinfo import startup_banner
from cscserver.config import GatewayConfig, ScraperConfig
from cscserver.ingestion.pipeline import NewsPipeline
from cscserver.ingestion.scheduler import NewsScheduler
from cscserver.logging_setup import configure_logging

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

gateway_config = GatewayConfig.from_env()
app = create_app(gateway_config)


def start_news_scraper(config: ScraperConfig):
    """Run the scraper schedule on a daemon thread. Returns the scheduler or None."""
    missing = config.missing_required()
    if missing:
        logger.warning("News scraper credentials not fully configured. Scraper will not run.")
        logger.warning(f"   Missing: {', '.join(missing)}")
        return None
    scheduler = NewsScheduler(NewsPipeline(config), config.interval_minutes)
    thread = threading.Thread(target=scheduler.run_forever, name="news-scraper", daemon=True)
    thread.start()
    logger.info("Starting news scraper (scheduled mode)...")
    return scheduler


if __name__ == '__main__':
    scraper_config = ScraperConfig.from_env()
    configure_logging(scraper_config.log_path)

    if not gateway_config.api_key:
        logger.warning("API_KEY is not set; authenticated routes will answer 500")

    for line in startup_banner(gateway_config.port, gateway_config.environment):
        logger.info(line)

    debug = gateway_config.is_development and os.environ.get('FLASK_DEBUG') == '1'
    if gateway_config.start_news_scraper:
        start_news_scraper(scraper_config)

    app.run(
        host=gateway_config.host,
        port=gateway_config.port,
        debug=debug,
        use_reloader=False,  # a reloader would start a second scraper thread
        threaded=True,
    )
