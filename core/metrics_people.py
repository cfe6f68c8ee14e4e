from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from core.charts import person_bar_chart, to_vega_spec
from core.filters import FilterState
from core.records import Record
from core.stats import person_series


def compute_people(filters: FilterState, ctx: Dict[str, Any], *, top_n: int = 20) -> Dict[str, Any]:
    filtered: List[Record] = ctx.get("filtered_records", []) or []
    top_n = max(1, int(top_n))

    people = person_series(filtered)
    charts: Dict[str, Any] = {}
    if people:
        charts["person_counts"] = to_vega_spec(person_bar_chart(people, top_n=top_n))

    return {
        "filters": asdict(filters),
        "person_count": len(people),
        "people": people,
        "top": people[:top_n],
        "charts": charts,
    }
