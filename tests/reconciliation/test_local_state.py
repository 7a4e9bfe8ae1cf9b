from datetime import date

from timetrack.attendance.model import AttendanceRecord, record_id_for
from timetrack.core.enums import AttendanceStatus
from timetrack.reconciliation.local_state import apply_optimistic, apply_optimistic_delete


def _rec(employee_id: str, day: date, status=AttendanceStatus.ABSENT) -> AttendanceRecord:
    return AttendanceRecord(
        id=record_id_for(employee_id, day),
        employee_id=employee_id,
        date=day,
        check_in=None,
        check_out=None,
        status=status,
    )


def test_apply_optimistic_appends_new_record():
    a = _rec("emp-1", date(2026, 3, 1))
    b = _rec("emp-1", date(2026, 3, 2))

    assert apply_optimistic((a,), b) == (a, b)


def test_apply_optimistic_replaces_in_place():
    a = _rec("emp-1", date(2026, 3, 1))
    b = _rec("emp-1", date(2026, 3, 2))
    updated = _rec("emp-1", date(2026, 3, 1), status=AttendanceStatus.ON_LEAVE)

    result = apply_optimistic([a, b], updated)

    assert result == (updated, b)


def test_apply_optimistic_does_not_touch_input():
    a = _rec("emp-1", date(2026, 3, 1))
    local = [a]

    apply_optimistic(local, _rec("emp-1", date(2026, 3, 2)))

    assert local == [a]


def test_apply_optimistic_delete():
    a = _rec("emp-1", date(2026, 3, 1))
    b = _rec("emp-1", date(2026, 3, 2))

    assert apply_optimistic_delete([a, b], a.id) == (b,)
    assert apply_optimistic_delete([a, b], "missing") == (a, b)
