from __future__ import annotations

from datetime import date

from timetrack.attendance.model import AttendanceRecord, record_id_for
from timetrack.core.enums import AttendanceStatus, LoadStatus, Role
from timetrack.employees.model import Employee, Profile
from timetrack.employees.service import SessionLoader


class FlakyDirectory:
    """Profile shows up only after ``visible_after`` lookups."""

    def __init__(self, profiles: dict[str, Profile], *, visible_after: int = 0, error: Exception | None = None):
        self._profiles = profiles
        self._visible_after = visible_after
        self._error = error
        self.calls = 0

    def get_profile(self, profile_id: str):
        self.calls += 1
        if self._error:
            raise self._error
        if self.calls <= self._visible_after:
            return None
        return self._profiles.get(profile_id)

    def list_employees(self):
        return [Employee(employee_id=p.profile_id, name=p.name, role=p.role_title or p.role.value) for p in self._profiles.values()]


class InMemoryAttendance:
    def __init__(self, records, *, error: Exception | None = None):
        self._records = list(records)
        self._error = error
        self.last_filter = "unset"

    def list_records(self, employee_id=None):
        self.last_filter = employee_id
        if self._error:
            raise self._error
        return [r for r in self._records if employee_id is None or r.employee_id == employee_id]


PROFILES = {
    "emp-1": Profile(profile_id="emp-1", name="Ana", email="ana@example.com", role=Role.EMPLOYEE),
    "mgr-1": Profile(profile_id="mgr-1", name="Max", email="max@example.com", role=Role.MANAGER),
}

RECORDS = [
    AttendanceRecord(
        id=record_id_for(emp, date(2026, 3, 2)),
        employee_id=emp,
        date=date(2026, 3, 2),
        check_in=None,
        check_out=None,
        status=AttendanceStatus.ABSENT,
    )
    for emp in ("emp-1", "emp-2")
]


def _loader(directory, attendance, sleeps: list):
    return SessionLoader(directory, attendance, retries=3, backoff_seconds=1.0, sleep=sleeps.append)


def test_profile_found_after_propagation_delay():
    sleeps: list = []
    directory = FlakyDirectory(PROFILES, visible_after=2)

    state = _loader(directory, InMemoryAttendance(RECORDS), sleeps).load("emp-1")

    assert state.status == LoadStatus.READY
    assert state.attempts == 3
    assert sleeps == [1.0, 1.0]


def test_gives_up_after_bounded_retries():
    sleeps: list = []
    directory = FlakyDirectory({}, visible_after=0)

    state = _loader(directory, InMemoryAttendance(RECORDS), sleeps).load("emp-1")

    assert state.status == LoadStatus.FAILED
    assert not state.ready
    assert state.error == "Profile not found"
    assert directory.calls == 4
    assert sleeps == [1.0, 1.0, 1.0]


def test_transport_errors_are_retried_then_fail():
    sleeps: list = []
    directory = FlakyDirectory(PROFILES, error=ConnectionError("refused"))

    state = _loader(directory, InMemoryAttendance(RECORDS), sleeps).load("emp-1")

    assert state.status == LoadStatus.FAILED
    assert "refused" in state.error
    assert directory.calls == 4


def test_employee_loads_only_own_records():
    attendance = InMemoryAttendance(RECORDS)

    state = _loader(FlakyDirectory(PROFILES), attendance, []).load("emp-1")

    assert attendance.last_filter == "emp-1"
    assert [r.employee_id for r in state.records] == ["emp-1"]
    assert len(state.employees) == 2


def test_manager_loads_all_records():
    attendance = InMemoryAttendance(RECORDS)

    state = _loader(FlakyDirectory(PROFILES), attendance, []).load("mgr-1")

    assert attendance.last_filter is None
    assert len(state.records) == 2


def test_record_fetch_failure_is_a_visible_failure():
    state = _loader(FlakyDirectory(PROFILES), InMemoryAttendance([], error=ConnectionError("down")), []).load("emp-1")

    assert state.status == LoadStatus.FAILED
    assert state.profile.profile_id == "emp-1"
    assert "down" in state.error
