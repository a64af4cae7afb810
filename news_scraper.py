#!/usr/bin/env python3
"""FS-UMI news scraper worker.

Scrapes the faculty news listing and keeps a Google Sheet (plus a local
JSON backup in ./data) up to date.

Usage:
    python news_scraper.py            # single run
    python news_scraper.py --once     # single run
    python news_scraper.py --schedule # run now, then every SCRAPER_INTERVAL minutes

Required environment (or .env):
    GOOGLE_SERVICE_ACCOUNT_EMAIL, GOOGLE_PRIVATE_KEY, GOOGLE_SPREADSHEET_6ID
Optional:
    SCRAPER_INTERVAL (minutes, default 30)
"""

import sys

from cscserver.cli import main


if __name__ == "__main__":
    sys.exit(main())
