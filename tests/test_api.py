"""Tests for the HTTP API."""

from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_meta_endpoints(client: TestClient, sample_text: str) -> None:
    people = client.post("/meta/people", json={"text": sample_text})
    months = client.post("/meta/months", json={"text": sample_text})

    assert people.status_code == 200
    assert people.json()["people"][0] == "all"
    assert months.json() == {"months": ["all", "2024-01", "2024-02"]}


def test_records_endpoint_filters(client: TestClient, sample_text: str) -> None:
    response = client.post("/records", json={"text": sample_text, "filters": {"person": "王五"}})

    body = response.json()
    assert response.status_code == 200
    assert [r["date"] for r in body["records"]] == ["2024-01-03", "2024-02-01"]
    assert body["filters"]["person"] == "王五"


def test_stats_endpoint(client: TestClient) -> None:
    text = "A 2024-01-01\nB 2024-01-01\nA 2024-01-02"

    response = client.post("/stats", json={"text": text})

    assert response.json() == {
        "total_records": 3,
        "unique_days": 2,
        "duplicate_day_count": 1,
        "monthly_series": [{"month": "2024-01", "record_count": 3, "day_count": 2}],
    }


def test_stats_endpoint_empty_text(client: TestClient) -> None:
    response = client.post("/stats", json={"text": "", "skip_blank": True})

    assert response.json()["total_records"] == 0


def test_overview_people_debug_endpoints(client: TestClient, sample_text: str) -> None:
    payload = {"text": sample_text, "filters": {"month": "2024-01"}}

    overview = client.post("/overview", json=payload).json()
    people = client.post("/people", params={"top_n": 2}, json=payload).json()
    debug = client.post("/debug", json=payload).json()

    assert overview["kpis"]["total_records"] == 5
    assert len(people["top"]) == 2
    assert debug["row_counts"]["filtered_records"] == 5


def test_export_endpoint(client: TestClient, sample_text: str) -> None:
    payload = {"text": sample_text, "filters": {"person": "李四", "month": "all"}}

    response = client.post("/export", json=payload)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert quote("用餐记录_李四_全部.csv") in response.headers["content-disposition"]
    assert response.content.decode("utf-8-sig").splitlines() == [
        "日期,姓名,类型",
        "2024-01-02,李四,午餐",
        "2024-02-01,李四,晚餐",
    ]


def test_invalid_body_is_rejected(client: TestClient) -> None:
    response = client.post("/stats", json={"text": 123, "skip_blank": "nope"})

    assert response.status_code == 422


def test_blank_person_is_an_exact_filter(client: TestClient) -> None:
    payload = {"text": "A 2024-01-01 lunch\n \nB 2024-01-02 dinner", "filters": {"person": ""}}

    records = client.post("/records", json=payload).json()["records"]
    export = client.post("/export", json=payload)

    assert [r["name"] for r in records] == [""]
    assert quote("用餐记录__全部.csv") in export.headers["content-disposition"]
    assert export.content.decode("utf-8-sig") == "日期,姓名,类型\n,,"
