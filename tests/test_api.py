from __future__ import annotations

import csv
import io
from concurrent.futures import Executor, Future
from datetime import date, datetime

import pytest

import config.testing as testing_settings
from timetrack.container import build_container
from timetrack.core.enums import Role
from timetrack.employees.model import Employee, Profile
from timetrack.main import create_app
from timetrack.reports.export import EXPORT_HEADERS


class ImmediateExecutor(Executor):
    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryAttendance:
    def __init__(self):
        self.saved = {}
        self.fail_writes = False

    def list_records(self, employee_id=None):
        return [r for r in self.saved.values() if employee_id is None or r.employee_id == employee_id]

    def upsert_record(self, record):
        if self.fail_writes:
            raise ConnectionError("store offline")
        self.saved[record.id] = record

    def delete_record(self, record_id):
        if self.fail_writes:
            raise ConnectionError("store offline")
        return self.saved.pop(record_id, None) is not None


class InMemoryDirectory:
    def __init__(self, profiles):
        self._profiles = {p.profile_id: p for p in profiles}

    def get_profile(self, profile_id):
        return self._profiles.get(profile_id)

    def list_employees(self):
        return [
            Employee(employee_id=p.profile_id, name=p.name, role=p.role_title or "Staff", department=p.department or "General")
            for p in self._profiles.values()
        ]


PROFILES = [
    Profile(profile_id="emp-1", name="Ana Silva", email="ana@example.com", role=Role.EMPLOYEE, department="Support"),
    Profile(profile_id="mgr-1", name="Max Weber", email="max@example.com", role=Role.MANAGER, role_title="Lead"),
]


@pytest.fixture
def clock():
    return Clock(datetime(2026, 3, 10, 9, 15))


@pytest.fixture
def repo():
    return InMemoryAttendance()


@pytest.fixture
def app(repo, clock):
    container = build_container(
        testing_settings,
        attendance_repo=repo,
        directory=InMemoryDirectory(PROFILES),
        executor=ImmediateExecutor(),
        clock=clock,
        sleep=lambda _: None,
    )
    return create_app(settings_module="config.testing", container=container)


def _sign_in(app, profile_id):
    client = app.test_client()
    res = client.post("/api/session", json={"profile_id": profile_id})
    assert res.status_code == 200, res.get_json()
    return client


def test_requires_session(app):
    res = app.test_client().get("/api/me/attendance")
    assert res.status_code == 401


def test_unknown_profile_is_a_visible_failure(app):
    res = app.test_client().post("/api/session", json={"profile_id": "ghost"})

    assert res.status_code == 503
    body = res.get_json()
    assert body["status"] == "FAILED"
    assert body["message"] == "Profile not found"


def test_check_in_then_check_out(app, repo, clock):
    client = _sign_in(app, "emp-1")

    res = client.post("/api/me/check-in")
    assert res.status_code == 201
    record = res.get_json()["record"]
    assert record["id"] == "emp-1-2026-03-10"
    assert record["status"] == "Present"

    assert client.post("/api/me/check-in").status_code == 409

    clock.now = datetime(2026, 3, 10, 17, 45)
    res = client.post("/api/me/check-out")
    assert res.status_code == 200
    assert res.get_json()["record"]["durationHours"] == 8.5
    assert repo.saved["emp-1-2026-03-10"].duration_hours == 8.5

    body = client.get("/api/me/attendance").get_json()
    assert body["today"]["checkOut"] == "2026-03-10T17:45:00"
    assert body["stats"]["total_hours"] == 8.5
    assert body["stats"]["attendance_rate"] == 100
    assert body["errors"] == []


def test_check_out_without_check_in(app):
    client = _sign_in(app, "emp-1")

    assert client.post("/api/me/check-out").status_code == 400


def test_manual_record_rules(app):
    client = _sign_in(app, "emp-1")

    ok = client.post(
        "/api/me/records",
        json={"date": "2026-02-05", "checkIn": "2026-02-05T10:15:00", "checkOut": "2026-02-05T18:15:00"},
    )
    assert ok.status_code == 201
    assert ok.get_json()["record"]["status"] == "Late"

    future = client.post("/api/me/records", json={"date": "2026-03-11"})
    assert future.status_code == 400

    missing = client.put("/api/me/records/2026-03-01", json={"checkIn": "2026-03-01T09:00:00"})
    assert missing.status_code == 404

    edited = client.put(
        "/api/me/records/2026-02-05",
        json={"checkIn": "2026-02-05T09:00:00", "checkOut": "2026-02-05T17:30:00"},
    )
    assert edited.status_code == 200
    assert edited.get_json()["record"]["durationHours"] == 8.5

    deleted = client.delete("/api/me/records/emp-1-2026-02-05")
    assert deleted.status_code == 200
    assert deleted.get_json()["deleted"] is True


def test_failed_write_keeps_record_and_reports_error(app, repo):
    client = _sign_in(app, "emp-1")
    repo.fail_writes = True

    res = client.post("/api/me/check-in")

    assert res.status_code == 502
    body = res.get_json()
    assert body["record"]["id"] == "emp-1-2026-03-10"
    assert "store offline" in body["message"]
    assert repo.saved == {}

    view = client.get("/api/me/attendance").get_json()
    assert [r["id"] for r in view["records"]] == ["emp-1-2026-03-10"]
    assert len(view["errors"]) == 1


def test_employee_cannot_reach_team_views(app):
    client = _sign_in(app, "emp-1")

    assert client.get("/api/team/attendance").status_code == 403
    assert client.get("/api/team/report.csv").status_code == 403


def test_manager_team_overview_and_export(app, clock):
    employee = _sign_in(app, "emp-1")
    employee.post("/api/me/check-in")
    clock.now = datetime(2026, 3, 10, 17, 15)
    employee.post("/api/me/check-out")

    manager = _sign_in(app, "mgr-1")

    overview = manager.get("/api/team/attendance").get_json()
    assert overview["period"] == "current"
    assert overview["stats"]["record_count"] == 1
    assert overview["employees"][0]["id"] == "emp-1"
    assert overview["employees"][0]["stats"]["total_hours"] == 8.0

    detail = manager.get("/api/team/employees/emp-1").get_json()
    assert detail["employee"]["name"] == "Ana Silva"
    assert manager.get("/api/team/employees/nobody").status_code == 404

    res = manager.get("/api/team/report.csv")
    assert res.status_code == 200
    assert "attendance_report_current_2026-03-10.csv" in res.headers["Content-Disposition"]
    rows = list(csv.reader(io.StringIO(res.get_data(as_text=True).lstrip("\ufeff"))))
    assert rows[0] == EXPORT_HEADERS
    assert rows[1][0] == "Ana Silva"
    assert rows[1][3] == date(2026, 3, 10).isoformat()

    previous = manager.get("/api/team/report.csv?period=previous")
    assert len(list(csv.reader(io.StringIO(previous.get_data(as_text=True).lstrip("\ufeff"))))) == 1

    narrative = manager.post("/api/team/narrative").get_json()
    assert narrative["success"] is True
    assert "Ana Silva" in narrative["report"]


def test_unknown_period_is_rejected(app):
    manager = _sign_in(app, "mgr-1")

    assert manager.get("/api/team/attendance?period=yearly").status_code == 400


def test_history_spans_periods_newest_first(app):
    client = _sign_in(app, "emp-1")
    client.post("/api/me/check-in")
    client.post("/api/me/records", json={"date": "2026-02-20", "checkIn": "2026-02-20T09:00:00"})

    body = client.get("/api/me/attendance").get_json()

    assert [r["id"] for r in body["records"]] == ["emp-1-2026-03-10"]
    assert [r["id"] for r in body["history"]] == ["emp-1-2026-03-10", "emp-1-2026-02-20"]
