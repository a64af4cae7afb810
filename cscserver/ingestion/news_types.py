"""Shared ingestion data types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple


def split_categories(raw: Any) -> Tuple[str, ...]:
    """Split a comma-joined category cell into a tuple of trimmed labels."""
    if not raw:
        return ()
    if isinstance(raw, (list, tuple)):
        parts = [str(p) for p in raw]
    else:
        parts = str(raw).split(",")
    return tuple(p.strip() for p in parts if p and p.strip())


@dataclass(frozen=True)
class NewsRecord:
    """One scraped news item. Identity within the store is the title."""

    title: str
    date: str
    link: str
    image_url: Optional[str] = None
    categories: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "date": self.date,
            "link": self.link,
            "image_url": self.image_url,
            "categories": list(self.categories),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewsRecord":
        return cls(
            title=str(data.get("title") or ""),
            date=str(data.get("date") or ""),
            link=str(data.get("link") or ""),
            image_url=data.get("image_url") or None,
            categories=split_categories(data.get("categories")),
        )

    def to_row(self) -> List[str]:
        """Five sheet cells: title, date, link, image, comma-joined categories."""
        return [
            self.title,
            self.date,
            self.link,
            self.image_url or "",
            ", ".join(self.categories),
        ]

    @classmethod
    def from_row(cls, cells: Sequence[Any]) -> "NewsRecord":
        # Sheets drops empty trailing cells, so rows can be shorter than 5.
        padded = list(cells) + [""] * (5 - len(cells))
        return cls(
            title=str(padded[0] or ""),
            date=str(padded[1] or ""),
            link=str(padded[2] or ""),
            image_url=str(padded[3]) if padded[3] else None,
            categories=split_categories(padded[4]),
        )


@dataclass(frozen=True)
class PageFetchResult:
    """Outcome of fetching one listing page.

    ``records == []`` with ``error is None`` means the page had no items;
    a non-None ``error`` means the fetch or parse failed.
    """

    url: str
    records: List[NewsRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MergeResult:
    merged: List[NewsRecord]
    new_count: int


@dataclass
class RunOutcome:
    """Summary of one pipeline run. Logged, never persisted."""

    success: bool
    total: int = 0
    new: int = 0
    store_updated: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "total": self.total,
            "new": self.new,
            "storeUpdated": self.store_updated,
            "error": self.error,
        }
