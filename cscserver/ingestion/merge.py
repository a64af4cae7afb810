"""Title-keyed merge of freshly fetched records into the known set."""

from __future__ import annotations

from typing import List, Sequence, Set

from cscserver.ingestion.news_types import MergeResult, NewsRecord


def merge_records(
    known: Sequence[NewsRecord],
    fetched: Sequence[NewsRecord],
    *,
    dedupe_fetched: bool = True,
) -> MergeResult:
    """Prepend fetched records whose title is not already known.

    ``known`` is returned unchanged after the new records. With
    ``dedupe_fetched=False`` two fetched records sharing a title are both
    kept (they are only checked against ``known``).
    """
    seen: Set[str] = {r.title for r in known}
    new: List[NewsRecord] = []
    for rec in fetched:
        if rec.title in seen:
            continue
        if dedupe_fetched:
            seen.add(rec.title)
        new.append(rec)
    return MergeResult(merged=new + list(known), new_count=len(new))
