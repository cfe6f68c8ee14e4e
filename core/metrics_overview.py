from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from core.charts import daily_trend_chart, monthly_trend_chart, to_vega_spec
from core.filters import FilterState
from core.records import Record
from core.stats import StatsResult, compute_stats, daily_series


def compute_overview(filters: FilterState, ctx: Dict[str, Any]) -> Dict[str, Any]:
    filtered: List[Record] = ctx.get("filtered_records", []) or []
    stats: StatsResult = ctx.get("stats") or compute_stats(filtered)

    monthly = [asdict(p) for p in stats.monthly_series]
    daily = daily_series(filtered)
    duplicate_days = [d for d in daily if d["count"] > 1]

    charts: Dict[str, Any] = {}
    if daily:
        charts["daily_trend"] = to_vega_spec(daily_trend_chart(daily))
    if monthly:
        charts["monthly_trend"] = to_vega_spec(monthly_trend_chart(monthly))

    avg_per_day = stats.total_records / stats.unique_days if stats.unique_days else None
    return {
        "filters": asdict(filters),
        "kpis": {
            "total_records": stats.total_records,
            "unique_days": stats.unique_days,
            "duplicate_day_count": stats.duplicate_day_count,
            "avg_records_per_day": avg_per_day,
        },
        "monthly_series": monthly,
        "daily_series": daily,
        "duplicate_days": duplicate_days,
        "charts": charts,
    }
