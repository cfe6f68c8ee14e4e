"""Tests for the filter engine."""

from core.dimensions import ALL
from core.filters import DateRange, FilterState, filter_records, normalize_filters
from core.records import Record


def test_default_state_is_identity(sample_records: list[Record]) -> None:
    assert filter_records(sample_records, FilterState()) == sample_records


def test_default_state_values() -> None:
    state = FilterState()

    assert state.person == ALL
    assert state.month == ALL
    assert state.date_range == DateRange("", "")


def test_person_filter_exact_match(sample_records: list[Record]) -> None:
    result = filter_records(sample_records, FilterState(person="张三"))

    assert len(result) == 4
    assert all(r.name == "张三" for r in result)


def test_person_filter_no_match_is_empty(sample_records: list[Record]) -> None:
    assert filter_records(sample_records, FilterState(person="张")) == []


def test_month_filter(sample_records: list[Record]) -> None:
    result = filter_records(sample_records, FilterState(month="2024-02"))

    assert [r.date for r in result] == ["2024-02-01", "2024-02-01", "2024-02-20"]


def test_month_filter_is_prefix_match() -> None:
    records = [Record(date="2024-01-05"), Record(date="2024-09-01"), Record(date="2024-10-01")]

    result = filter_records(records, FilterState(month="2024-0"))

    assert [r.date for r in result] == ["2024-01-05", "2024-09-01"]


def test_date_range_start_only_uses_lexical_order() -> None:
    records = [
        Record(name="A", date="2024-01-01"),
        Record(name="B", date="2024-01-02"),
        Record(name="C", date="2024-1-5"),
        Record(name="D", date=""),
        Record(name="E", date="2024-02-01"),
    ]

    result = filter_records(records, FilterState(date_range=DateRange(start="2024-01-02")))

    # "2024-1-5" sorts after "2024-01-02" lexically, "" sorts before it.
    assert [r.name for r in result] == ["B", "C", "E"]


def test_date_range_inclusive_bounds(sample_records: list[Record]) -> None:
    state = FilterState(date_range=DateRange(start="2024-01-02", end="2024-01-15"))

    result = filter_records(sample_records, state)

    assert [r.date for r in result] == ["2024-01-02"] * 3 + ["2024-01-03", "2024-01-15"]


def test_filters_combine_with_and(sample_records: list[Record]) -> None:
    state = FilterState(person="李四", month="2024-02", date_range=DateRange(end="2024-02-10"))

    result = filter_records(sample_records, state)

    assert result == [Record("李四", "2024-02-01", "晚餐", "18:33:50")]


def test_filter_is_idempotent_and_order_preserving(sample_records: list[Record]) -> None:
    states = [
        FilterState(),
        FilterState(person="王五"),
        FilterState(month="2024-01"),
        FilterState(date_range=DateRange(start="2024-01-03", end="2024-02-01")),
    ]
    for state in states:
        once = filter_records(sample_records, state)
        assert filter_records(once, state) == once
        positions = [sample_records.index(r) for r in once]
        assert positions == sorted(positions)


def test_normalize_filters_defaults() -> None:
    assert normalize_filters(None) == FilterState()
    assert normalize_filters({}) == FilterState()
    assert normalize_filters({"person": None, "month": None}) == FilterState()


def test_normalize_filters_keeps_blank_person() -> None:
    state = normalize_filters({"person": "", "month": None})

    assert state == FilterState(person="", month=ALL)


def test_blank_person_matches_only_blank_names() -> None:
    records = [Record(name="A", date="2024-01-01"), Record(), Record(name="B", date="2024-01-02")]

    assert filter_records(records, normalize_filters({"person": ""})) == [Record()]


def test_normalize_filters_nested_and_flat_range() -> None:
    nested = normalize_filters({"person": " A ", "month": "2024-01", "date_range": {"start": "2024-01-01", "end": None}})
    flat = normalize_filters({"person": "A", "month": "2024-01", "start_date": "2024-01-01"})

    assert nested == FilterState("A", "2024-01", DateRange("2024-01-01", ""))
    assert flat == nested
