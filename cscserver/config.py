"""Process-wide configuration, loaded once at startup.

Every component receives its config object explicitly; nothing below the
entry points reads ``os.environ`` directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Tuple


REQUIRED_SCRAPER_VARS: Tuple[str, ...] = (
    "GOOGLE_SERVICE_ACCOUNT_EMAIL",
    "GOOGLE_PRIVATE_KEY",
    "GOOGLE_SPREADSHEET_6ID",
)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

SHEETS_SCOPES: Tuple[str, ...] = (
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/spreadsheets",
)


class ConfigurationError(ValueError):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


def _get_int(env: Mapping[str, str], name: str, default: int, *, minimum: int = 1) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = (env.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ScraperConfig:
    """Settings for the news ingestion pipeline."""

    service_account_email: str = ""
    private_key: str = ""
    spreadsheet_id: str = ""

    sheet_name: str = "Sheet1"
    base_url: str = "https://www.fs-umi.ac.ma/index.php/actualites/"
    base_origin: str = "https://www.fs-umi.ac.ma"
    pages_to_fetch: int = 3
    request_delay_ms: int = 1000
    request_timeout: int = 10
    user_agent: str = DEFAULT_USER_AGENT
    interval_minutes: int = 30
    dedupe_fetched: bool = True

    data_dir: Path = field(default_factory=lambda: Path("data"))
    news_file: str = "news.json"
    log_file: str = "scraper.log"

    data_range: str = "A:E"
    clear_range: str = "A2:Z1000"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ScraperConfig":
        env = os.environ if env is None else env
        return cls(
            service_account_email=(env.get("GOOGLE_SERVICE_ACCOUNT_EMAIL") or "").strip(),
            private_key=env.get("GOOGLE_PRIVATE_KEY") or "",
            spreadsheet_id=(env.get("GOOGLE_SPREADSHEET_6ID") or "").strip(),
            sheet_name=(env.get("SCRAPER_SHEET_NAME") or "Sheet1").strip() or "Sheet1",
            pages_to_fetch=_get_int(env, "SCRAPER_PAGES", 3),
            request_delay_ms=_get_int(env, "SCRAPER_REQUEST_DELAY_MS", 1000, minimum=0),
            request_timeout=_get_int(env, "SCRAPER_TIMEOUT", 10),
            interval_minutes=_get_int(env, "SCRAPER_INTERVAL", 30),
            dedupe_fetched=_get_bool(env, "SCRAPER_DEDUPE_FETCHED", True),
            data_dir=Path(env.get("SCRAPER_DATA_DIR") or "data"),
        )

    @property
    def news_path(self) -> Path:
        return self.data_dir / self.news_file

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.log_file

    @property
    def request_delay_seconds(self) -> float:
        return self.request_delay_ms / 1000.0

    @property
    def normalized_private_key(self) -> str:
        # .env files usually carry the PEM with literal "\n" sequences
        return self.private_key.replace("\\n", "\n")

    def missing_required(self) -> List[str]:
        values = {
            "GOOGLE_SERVICE_ACCOUNT_EMAIL": self.service_account_email,
            "GOOGLE_PRIVATE_KEY": self.private_key,
            "GOOGLE_SPREADSHEET_6ID": self.spreadsheet_id,
        }
        return [name for name in REQUIRED_SCRAPER_VARS if not values[name]]

    def validate(self) -> None:
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                missing=missing,
            )


@dataclass(frozen=True)
class GatewayConfig:
    """Settings for the HTTP API gateway."""

    api_key: str = ""
    host: str = "0.0.0.0"
    port: int = 3001
    allowed_origins: Tuple[str, ...] = ()
    environment: str = "development"
    rate_limit: str = "100 per 15 minutes"

    email_user: str = ""
    email_password: str = ""
    email_smtp_server: str = "smtp.mail.yahoo.com"
    email_smtp_port: int = 587

    start_news_scraper: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GatewayConfig":
        env = os.environ if env is None else env
        origins = tuple(
            o.strip() for o in (env.get("ALLOWED_ORIGINS") or "").split(",") if o.strip()
        )
        return cls(
            api_key=(env.get("API_KEY") or "").strip(),
            host=(env.get("HOST") or "0.0.0.0").strip(),
            port=_get_int(env, "PORT", 3001),
            allowed_origins=origins,
            environment=(env.get("APP_ENV") or env.get("NODE_ENV") or "development").strip(),
            email_user=(env.get("YAHOO_EMAIL") or "").strip(),
            email_password=env.get("YAHOO_APP_PASSWORD") or "",
            email_smtp_server=(env.get("EMAIL_SMTP_SERVER") or "smtp.mail.yahoo.com").strip(),
            email_smtp_port=_get_int(env, "EMAIL_SMTP_PORT", 587),
            start_news_scraper=_get_bool(env, "START_NEWS_SCRAPER", True),
        )

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_password)

    @property
    def cors_origins(self):
        return list(self.allowed_origins) if self.allowed_origins else "*"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"
