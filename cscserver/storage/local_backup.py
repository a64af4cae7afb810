"""Local JSON mirror of the news store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple, Union

from cscserver.ingestion.news_types import NewsRecord

logger = logging.getLogger(__name__)


class LocalBackup:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Tuple[List[NewsRecord], Optional[str]]:
        """Return (records, error). A missing file is not an error."""
        if not self.path.exists():
            return [], None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            return [], f"unreadable backup {self.path}: {e}"
        if not isinstance(payload, list):
            return [], f"unexpected backup format in {self.path}: top level is {type(payload).__name__}"
        records = [
            NewsRecord.from_dict(item)
            for item in payload
            if isinstance(item, dict) and item.get("title")
        ]
        return records, None

    def save(self, records: List[NewsRecord]) -> Optional[str]:
        """Write records as pretty-printed JSON. Returns an error message on failure."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".news-", suffix=".json", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in records], f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            return f"could not write backup {self.path}: {e}"
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        return None
