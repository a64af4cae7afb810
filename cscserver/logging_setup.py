"""Run logger: console + append-only log file."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"

# Handlers installed by configure_logging, so a second call can replace them.
_installed: List[logging.Handler] = []


class IsoFormatter(logging.Formatter):
    """Formats record times as ISO-8601 UTC with milliseconds, e.g. 2024-05-01T10:00:00.123Z."""

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{int(record.msecs):03d}Z"


class DataDirFileHandler(logging.FileHandler):
    """FileHandler that recreates the log file (and its directory) if it disappears."""

    def emit(self, record):
        if not os.path.exists(self.baseFilename):
            if self.stream is not None:
                stream, self.stream = self.stream, None
                stream.close()
            try:
                Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
            except OSError:
                self.handleError(record)
                return
        super().emit(record)


def configure_logging(
    log_file: Optional[Union[str, Path]] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Attach a stdout handler and, when possible, a file handler to the root logger.

    Failure to open the log file never propagates: logging continues on the
    console only. Write errors after that are absorbed by ``Handler.handleError``.
    """
    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    formatter = IsoFormatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)
    _installed.append(console)

    file_error = None
    if log_file is not None:
        try:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = DataDirFileHandler(path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
            _installed.append(file_handler)
        except OSError as e:
            file_error = e

    root.setLevel(level)
    if file_error is not None:
        root.warning(f"Log file unavailable, logging to console only: {file_error}")
    return root
