from __future__ import annotations

from typing import Iterable, List, Tuple

from core.records import Record


ALL = "all"


def distinct_people(records: Iterable[Record]) -> List[str]:
    """Sentinel first, then each name in first-seen order."""
    return [ALL] + list(dict.fromkeys(r.name for r in records))


def distinct_months(records: Iterable[Record]) -> List[str]:
    """Sentinel first, then the sorted distinct `YYYY-MM` prefixes of each date."""
    return [ALL] + sorted({r.month for r in records})


def date_bounds(records: Iterable[Record]) -> Tuple[str, str]:
    dates = [r.date for r in records if r.date]
    if not dates:
        return "", ""
    return min(dates), max(dates)
