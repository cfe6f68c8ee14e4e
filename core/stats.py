"""Per-day, per-month and per-person aggregation over (filtered) records.

Buckets are rebuilt from scratch on every call; nothing here is cached or mutated
across calls.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Set

from core.records import Record


@dataclass
class DayBucket:
    count: int = 0
    types: Set[str] = field(default_factory=set)


@dataclass
class MonthBucket:
    count: int = 0
    days: Set[str] = field(default_factory=set)


@dataclass
class PersonBucket:
    count: int = 0
    days: Set[str] = field(default_factory=set)


@dataclass(frozen=True)
class MonthlyPoint:
    month: str
    record_count: int
    day_count: int


@dataclass(frozen=True)
class StatsResult:
    total_records: int = 0
    unique_days: int = 0
    duplicate_day_count: int = 0
    monthly_series: List[MonthlyPoint] = field(default_factory=list)


def build_day_buckets(records: Iterable[Record]) -> Dict[str, DayBucket]:
    buckets: Dict[str, DayBucket] = defaultdict(DayBucket)
    for r in records:
        bucket = buckets[r.date]
        bucket.count += 1
        bucket.types.add(r.meal_type)
    return dict(buckets)


def build_month_buckets(records: Iterable[Record]) -> Dict[str, MonthBucket]:
    buckets: Dict[str, MonthBucket] = defaultdict(MonthBucket)
    for r in records:
        bucket = buckets[r.month]
        bucket.count += 1
        bucket.days.add(r.date)
    return dict(buckets)


def build_person_buckets(records: Iterable[Record]) -> Dict[str, PersonBucket]:
    buckets: Dict[str, PersonBucket] = defaultdict(PersonBucket)
    for r in records:
        bucket = buckets[r.name]
        bucket.count += 1
        bucket.days.add(r.date)
    return dict(buckets)


def monthly_series(month_buckets: Dict[str, MonthBucket]) -> List[MonthlyPoint]:
    return [
        MonthlyPoint(month=month, record_count=b.count, day_count=len(b.days))
        for month, b in sorted(month_buckets.items())
    ]


def compute_stats(records: Sequence[Record]) -> StatsResult:
    records = list(records)
    days = build_day_buckets(records)
    return StatsResult(
        total_records=len(records),
        unique_days=len(days),
        duplicate_day_count=sum(1 for b in days.values() if b.count > 1),
        monthly_series=monthly_series(build_month_buckets(records)),
    )


def daily_series(records: Iterable[Record]) -> List[Dict[str, Any]]:
    return [
        {"date": day, "count": b.count, "meal_types": sorted(b.types)}
        for day, b in sorted(build_day_buckets(records).items())
    ]


def person_series(records: Iterable[Record]) -> List[Dict[str, Any]]:
    rows = [
        {"name": name, "record_count": b.count, "day_count": len(b.days)}
        for name, b in build_person_buckets(records).items()
    ]
    return sorted(rows, key=lambda row: (-row["record_count"], row["name"]))
