from __future__ import annotations

import re
from collections import Counter
from dataclasses import asdict
from typing import Any, Dict, List

from core.filters import FilterState
from core.records import Record

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def compute_debug(filters: FilterState, ctx: Dict[str, Any]) -> Dict[str, Any]:
    """Data-quality counters over the unfiltered records."""
    records: List[Record] = ctx.get("records", []) or []
    filtered: List[Record] = ctx.get("filtered_records", []) or []

    blank = {i for i, r in enumerate(records) if not any((r.name, r.date, r.meal_type, r.timestamp))}
    bad_dates = [
        {"record": i + 1, "name": r.name, "date": r.date}
        for i, r in enumerate(records)
        if i not in blank and not ISO_DATE.match(r.date)
    ]
    missing_type = sum(1 for r in records if r.date and not r.meal_type)
    missing_timestamp = sum(1 for r in records if r.date and not r.timestamp)

    return {
        "filters": asdict(filters),
        "row_counts": {
            "records": len(records),
            "filtered_records": len(filtered),
        },
        "cleaning_checks": {
            "blank_lines": len(blank),
            "non_iso_dates": len(bad_dates),
            "missing_meal_type": missing_type,
            "missing_timestamp": missing_timestamp,
        },
        "non_iso_date_sample": bad_dates[:20],
        "meal_type_counts": dict(Counter(r.meal_type for r in records if r.meal_type).most_common()),
    }
