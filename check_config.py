#!/usr/bin/env python3
"""
Check server configuration (.env) before starting the gateway or scraper.
Run with: python check_config.py
"""

import os
import sys

from dotenv import load_dotenv

from cscserver.diagnostics import config_report, has_errors


def main() -> int:
    load_dotenv()
    print("🔍 Checking server configuration...\n")
    lines = config_report(os.environ)
    for line in lines:
        print(line.render())
    print("\n📋 Summary:")
    print("   Make sure API_KEY here matches the API_KEY used by the web frontend")
    return 1 if has_errors(lines) else 0


if __name__ == "__main__":
    sys.exit(main())
