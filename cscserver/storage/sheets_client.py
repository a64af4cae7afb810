"""Google Sheets v4 access for the news store.

Only the four operations the store needs are exposed: list sheet names,
read a range, clear a range, append rows.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from cscserver.config import SHEETS_SCOPES, ScraperConfig

logger = logging.getLogger(__name__)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, HttpError):
        status = getattr(exc.resp, "status", None)
        try:
            status = int(status)
        except (TypeError, ValueError):
            return False
        return status == 429 or status >= 500
    return isinstance(exc, (ConnectionError, TimeoutError, socket.timeout))


_api_retry = retry(
    retry=retry_if_exception(_is_transient),
    stop=stop_after_attempt(3),
    wait=wait_exponential(min=1, max=8),
    reraise=True,
)


@dataclass(frozen=True)
class SheetNameResolution:
    """Result of resolving the sheet (tab) to use.

    ``resolved`` is False when the configured default is used because
    listing failed or returned nothing; ``error`` says why.
    """

    name: str
    resolved: bool
    error: Optional[str] = None


def quote_sheet_name(name: str) -> str:
    """Quote a sheet title for A1 notation when it contains anything but word characters."""
    if name and all(ch.isalnum() or ch == "_" for ch in name):
        return name
    return "'" + name.replace("'", "''") + "'"


class SheetsClient:
    def __init__(self, config: ScraperConfig, service: Any = None):
        self.config = config
        self._svc = service

    def _service(self):
        if self._svc is None:
            creds = service_account.Credentials.from_service_account_info(
                {
                    "type": "service_account",
                    "client_email": self.config.service_account_email,
                    "private_key": self.config.normalized_private_key,
                    "token_uri": "https://oauth2.googleapis.com/token",
                },
                scopes=list(SHEETS_SCOPES),
            )
            self._svc = build("sheets", "v4", credentials=creds, cache_discovery=False)
        return self._svc

    def a1(self, sheet_name: str, cells: str) -> str:
        return f"{quote_sheet_name(sheet_name)}!{cells}"

    @_api_retry
    def sheet_names(self) -> List[str]:
        resp = (
            self._service()
            .spreadsheets()
            .get(spreadsheetId=self.config.spreadsheet_id, fields="sheets.properties.title")
            .execute()
        )
        return [
            s.get("properties", {}).get("title", "")
            for s in (resp.get("sheets") or [])
            if s.get("properties", {}).get("title")
        ]

    def resolve_sheet_name(self, default: Optional[str] = None) -> SheetNameResolution:
        default = default or self.config.sheet_name
        try:
            names = self.sheet_names()
        except Exception as e:
            logger.error(f"Error getting sheet names: {e}")
            return SheetNameResolution(name=default, resolved=False, error=str(e))
        if not names:
            return SheetNameResolution(name=default, resolved=False, error="spreadsheet has no sheets")
        logger.info(f"Available sheet names: {', '.join(names)}")
        return SheetNameResolution(name=names[0], resolved=True)

    @_api_retry
    def read_range(self, a1_range: str) -> List[List[Any]]:
        resp = (
            self._service()
            .spreadsheets()
            .values()
            .get(spreadsheetId=self.config.spreadsheet_id, range=a1_range)
            .execute()
        )
        return resp.get("values") or []

    @_api_retry
    def clear_range(self, a1_range: str) -> None:
        (
            self._service()
            .spreadsheets()
            .values()
            .clear(spreadsheetId=self.config.spreadsheet_id, range=a1_range, body={})
            .execute()
        )

    @_api_retry
    def append_rows(self, a1_range: str, rows: Sequence[Sequence[Any]]) -> None:
        (
            self._service()
            .spreadsheets()
            .values()
            .append(
                spreadsheetId=self.config.spreadsheet_id,
                range=a1_range,
                valueInputOption="USER_ENTERED",
                body={"values": [list(r) for r in rows]},
            )
            .execute()
        )
