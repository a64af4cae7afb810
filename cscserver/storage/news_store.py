"""Canonical news store: Google Sheet first, local JSON backup second.

Reads fall back sheet -> local file -> empty. Writes go to the sheet and
then, unconditionally, to the local file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from cscserver.config import ScraperConfig
from cscserver.ingestion.news_types import NewsRecord
from cscserver.storage.local_backup import LocalBackup
from cscserver.storage.sheets_client import SheetsClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Records loaded plus where they came from.

    ``source`` is ``"sheets"``, ``"local"`` or ``"empty"``. ``errors`` holds
    every failure that was recovered from along the way.
    """

    records: List[NewsRecord]
    source: str
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SaveResult:
    remote_ok: bool
    local_ok: bool
    remote_error: Optional[str] = None
    local_error: Optional[str] = None


class NewsStore:
    def __init__(
        self,
        config: ScraperConfig,
        sheets: Optional[SheetsClient] = None,
        backup: Optional[LocalBackup] = None,
    ):
        self.config = config
        self.sheets = sheets or SheetsClient(config)
        self.backup = backup or LocalBackup(config.news_path)

    def _sheet_name(self) -> str:
        resolution = self.sheets.resolve_sheet_name(self.config.sheet_name)
        if resolution.resolved:
            logger.info(f"Using sheet name: {resolution.name}")
        else:
            logger.warning(
                f"Could not resolve sheet name ({resolution.error}); using default: {resolution.name}"
            )
        return resolution.name

    def load_from_sheets(self) -> List[NewsRecord]:
        """Read the sheet. Raises on any API or credential failure."""
        logger.info("Loading existing news from Google Sheets...")
        if not self.config.spreadsheet_id:
            raise ValueError("GOOGLE_SPREADSHEET_6ID environment variable not set")
        sheet = self._sheet_name()
        rows = self.sheets.read_range(self.sheets.a1(sheet, self.config.data_range))
        logger.info(f"Found {len(rows)} rows in Google Sheets")
        records = [NewsRecord.from_row(row) for row in rows[1:]]
        return [r for r in records if r.title]

    def load(self) -> LoadResult:
        errors: List[str] = []
        try:
            records = self.load_from_sheets()
        except Exception as e:
            msg = f"Error loading existing news from Google Sheets: {e}"
            logger.error(msg)
            errors.append(msg)
            records = []

        if records:
            logger.info(f"Loaded {len(records)} news items from Google Sheets")
            return LoadResult(records=records, source="sheets", errors=errors)

        logger.info("Falling back to local file...")
        local, err = self.backup.load()
        if err:
            logger.error(f"Error loading existing news from file: {err}")
            errors.append(err)
        if local:
            logger.info(f"Loaded {len(local)} news items from local file")
            return LoadResult(records=local, source="local", errors=errors)
        return LoadResult(records=[], source="empty", errors=errors)

    def save_to_sheets(self, records: Sequence[NewsRecord]) -> None:
        logger.info("Updating Google Sheets...")
        if not self.config.spreadsheet_id:
            raise ValueError("GOOGLE_SPREADSHEET_6ID environment variable not set")
        sheet = self._sheet_name()
        self.sheets.clear_range(self.sheets.a1(sheet, self.config.clear_range))
        rows = [r.to_row() for r in records]
        if rows:
            self.sheets.append_rows(self.sheets.a1(sheet, self.config.data_range), rows)
        logger.info(f"Updated Google Sheets with {len(rows)} news items")

    def save(self, records: Sequence[NewsRecord]) -> SaveResult:
        remote_error = None
        try:
            self.save_to_sheets(records)
        except Exception as e:
            remote_error = str(e)
            logger.error(f"Error updating Google Sheets: {e}")

        local_error = self.backup.save(list(records))
        if local_error:
            logger.error(f"Error saving news to file: {local_error}")
        else:
            logger.info(f"Saved {len(records)} news items to local file")

        return SaveResult(
            remote_ok=remote_error is None,
            local_ok=local_error is None,
            remote_error=remote_error,
            local_error=local_error,
        )
