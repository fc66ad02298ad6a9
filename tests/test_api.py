from __future__ import annotations

from fastapi.testclient import TestClient

from main import app
from tests.sample_request import payload

client = TestClient(app)


def test_root_and_health() -> None:
    assert client.get("/").json()["docs"] == "/docs"
    body = client.get("/api/health").json()
    assert body["status"] == "ok"


def test_generate_returns_assignments_and_unassigned() -> None:
    resp = client.post("/api/assignments/generate", json=payload())
    assert resp.status_code == 200
    body = resp.json()

    pairs = {(a["task_id"], a["member_id"]) for a in body["generated_assignments"]}
    assert pairs == {("t1", "m1"), ("t2", "m2"), ("t4", "m1")}
    assert [(u["id"], u["unassigned_reason"]) for u in body["unassigned_tasks"]] == [("t3", "no_skill")]
    m1 = next(w for w in body["daily_workloads"] if w["member_id"] == "m1")
    assert (m1["capacity"], m1["total_duration"], m1["upkeep_duration"]) == (240, 60, 20)


def test_generate_without_roster_reports_no_staff() -> None:
    data = payload()
    data["target_date"] = "2024-06-10"
    body = client.post("/api/assignments/generate", json=data).json()
    assert body["daily_workloads"] == []
    assert {u["unassigned_reason"] for u in body["unassigned_tasks"]} == {"no_staff_today"}
    assert len(body["unassigned_tasks"]) == 5


def test_generate_range_covers_each_day() -> None:
    resp = client.post("/api/assignments/generate-range?days=2", json=payload())
    assert resp.status_code == 200
    days = resp.json()["days"]
    assert list(days) == ["2024-06-03", "2024-06-04"]
    tuesday = {a["task_id"] for a in days["2024-06-04"]["generated_assignments"]}
    # Cy has 240 min on Tuesday: T1 (60) then the weekly truck (120)
    assert {"t1", "t5"} <= tuesday


def test_generate_range_bounds() -> None:
    resp = client.post("/api/assignments/generate-range?days=0", json=payload())
    assert resp.status_code == 422


def test_bad_date_is_400() -> None:
    data = payload()
    data["target_date"] = "June 3"
    resp = client.post("/api/assignments/generate", json=data)
    assert resp.status_code == 400


def test_malformed_body_is_422() -> None:
    data = payload()
    data["tasks"][0]["estimated_duration"] = "long"
    resp = client.post("/api/assignments/generate", json=data)
    assert resp.status_code == 422


def test_check_endpoint() -> None:
    body = client.post("/api/assignments/check", json=payload()).json()
    assert body["ok"] is False
    assert any("no member holds skill sk-bake" in m for m in body["messages"])


def test_malformed_clock_strings_are_400() -> None:
    for field, value in [("earliest_start", "9:3O"), ("due_by", "noonish")]:
        data = payload()
        data["tasks"][0][field] = value
        resp = client.post("/api/assignments/generate", json=data)
        assert resp.status_code == 400
        assert field in resp.json()["detail"]

    data = payload()
    data["weekly_schedule"][0]["shifts"][0]["end"] = "25:99"
    resp = client.post("/api/assignments/generate-range?days=2", json=data)
    assert resp.status_code == 400
    assert "bad times" in resp.json()["detail"]
