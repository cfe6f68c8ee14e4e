from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from core.dimensions import ALL
from core.records import Record


@dataclass(frozen=True)
class DateRange:
    start: str = ""
    end: str = ""


@dataclass(frozen=True)
class FilterState:
    person: str = ALL
    month: str = ALL
    date_range: DateRange = field(default_factory=DateRange)


def _as_str(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_choice(value: object) -> str:
    # Only a missing selection means "no constraint"; "" is a real (blank) name.
    if value is None:
        return ALL
    return _as_str(value)


def normalize_filters(raw: Optional[dict]) -> FilterState:
    raw = raw or {}
    rng = raw.get("date_range") or {}
    if not isinstance(rng, dict):
        rng = {}
    start = rng.get("start", raw.get("start_date"))
    end = rng.get("end", raw.get("end_date"))
    return FilterState(
        person=_as_choice(raw.get("person")),
        month=_as_choice(raw.get("month")),
        date_range=DateRange(start=_as_str(start), end=_as_str(end)),
    )


def person_match(record: Record, state: FilterState) -> bool:
    return state.person == ALL or record.name == state.person


def month_match(record: Record, state: FilterState) -> bool:
    # Prefix match: "2024-0" also matches 2024-01 through 2024-09.
    return state.month == ALL or record.date.startswith(state.month)


def date_range_match(record: Record, state: FilterState) -> bool:
    start, end = state.date_range.start, state.date_range.end
    return (not start or record.date >= start) and (not end or record.date <= end)


def matches(record: Record, state: FilterState) -> bool:
    return person_match(record, state) and month_match(record, state) and date_range_match(record, state)


def filter_records(records: Iterable[Record], state: FilterState) -> List[Record]:
    return [r for r in records if matches(r, state)]

