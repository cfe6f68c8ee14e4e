"""Shared test fixtures."""

import pytest

from core.records import Record, parse_records


SAMPLE_LOG = "\n".join(
    [
        "张三 2024-01-02 午餐 12:05:31",
        "李四 2024-01-02 午餐 12:07:10",
        "张三 2024-01-02 晚餐 18:20:44",
        "王五 2024-01-03 早餐 07:45:02",
        "张三 2024-01-15 午餐 12:01:19",
        "李四 2024-02-01 晚餐 18:33:50",
        "王五 2024-02-01 午餐 11:58:07",
        "张三 2024-02-20 早餐 07:30:26",
    ]
)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_LOG


@pytest.fixture
def sample_records() -> list[Record]:
    return parse_records(SAMPLE_LOG)


@pytest.fixture
def spec_records() -> list[Record]:
    return [
        Record(name="A", date="2024-01-01"),
        Record(name="B", date="2024-01-01"),
        Record(name="A", date="2024-01-02"),
    ]
