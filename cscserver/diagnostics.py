"""Configuration diagnostics for the gateway and the scraper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping

from cscserver.api.auth import mask_secret
from cscserver.config import REQUIRED_SCRAPER_VARS

OK = "ok"
WARN = "warn"
ERROR = "error"


@dataclass(frozen=True)
class CheckLine:
    level: str
    message: str

    def render(self) -> str:
        marker = {OK: "✅", WARN: "⚠️ ", ERROR: "❌"}.get(self.level, "  ")
        return f"{marker} {self.message}"


def config_report(env: Mapping[str, str]) -> List[CheckLine]:
    lines: List[CheckLine] = []

    api_key = env.get("API_KEY")
    if not api_key:
        lines.append(CheckLine(ERROR, "API_KEY is not set in .env file"))
    else:
        trimmed = api_key.strip()
        if api_key != trimmed:
            lines.append(CheckLine(WARN, "API_KEY has leading/trailing whitespace"))
        lines.append(CheckLine(OK, f"API_KEY is set (length: {len(trimmed)}, preview: {mask_secret(trimmed)})"))

    lines.append(CheckLine(OK, f"PORT: {env.get('PORT') or '3001'}"))

    origins = env.get("ALLOWED_ORIGINS")
    if not origins:
        lines.append(CheckLine(WARN, "ALLOWED_ORIGINS is not set (will allow all origins)"))
    else:
        parsed = [o.strip() for o in origins.split(",") if o.strip()]
        lines.append(CheckLine(OK, f"ALLOWED_ORIGINS: {', '.join(parsed)}"))

    email = env.get("YAHOO_EMAIL")
    if not email:
        lines.append(CheckLine(ERROR, "YAHOO_EMAIL is not set"))
    else:
        lines.append(CheckLine(OK, f"YAHOO_EMAIL: {email}"))
    password = env.get("YAHOO_APP_PASSWORD")
    if not password:
        lines.append(CheckLine(ERROR, "YAHOO_APP_PASSWORD is not set"))
    else:
        lines.append(CheckLine(OK, f"YAHOO_APP_PASSWORD is set (length: {len(password)})"))

    environment = env.get("APP_ENV") or env.get("NODE_ENV") or "development"
    lines.append(CheckLine(OK, f"Environment: {environment}"))

    missing = [name for name in REQUIRED_SCRAPER_VARS if not env.get(name)]
    if missing:
        lines.append(CheckLine(WARN, f"News scraper disabled, missing: {', '.join(missing)}"))
    else:
        lines.append(CheckLine(OK, f"News scraper credentials set (interval: {env.get('SCRAPER_INTERVAL') or '30'} min)"))

    return lines


def has_errors(lines: List[CheckLine]) -> bool:
    return any(line.level == ERROR for line in lines)
