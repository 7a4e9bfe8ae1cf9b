from __future__ import annotations

from datetime import date, datetime

from timetrack.attendance.model import AttendanceRecord, record_id_for
from timetrack.core.enums import AttendanceStatus, Period
from timetrack.employees.model import Employee
from timetrack.reports.export import EXPORT_HEADERS, build_export_rows, export_filename, write_csv
from timetrack.reports.narrative import (
    FALLBACK_REPORT,
    NarrativeReportService,
    SummaryReportGenerator,
    employee_summaries,
)

EMPLOYEES = [Employee(employee_id="emp-1", name="Ana Lima", role="Developer", department="Engineering")]


def _records():
    return [
        AttendanceRecord(
            id=record_id_for("emp-1", date(2026, 3, 2)),
            employee_id="emp-1",
            date=date(2026, 3, 2),
            check_in=datetime(2026, 3, 2, 9, 5),
            check_out=datetime(2026, 3, 2, 17, 35),
            status=AttendanceStatus.PRESENT,
            duration_hours=8.5,
        ),
        AttendanceRecord(
            id=record_id_for("ghost", date(2026, 3, 2)),
            employee_id="ghost",
            date=date(2026, 3, 2),
            check_in=None,
            check_out=None,
            status=AttendanceStatus.ABSENT,
            duration_hours=0.0,
        ),
    ]


def test_export_rows_join_employee_identity():
    rows = build_export_rows(_records(), EMPLOYEES)

    assert rows[0].employee_name == "Ana Lima"
    assert rows[0].department == "Engineering"
    assert rows[0].check_in == "09:05"
    assert rows[0].check_out == "17:35"
    assert rows[0].duration_hours == 8.5
    assert rows[1].employee_name == "Unknown"
    assert rows[1].role == "N/A"
    assert rows[1].check_in == "-"


def test_write_csv_has_header_and_one_line_per_row():
    content = write_csv(build_export_rows(_records(), EMPLOYEES)).decode("utf-8-sig")
    lines = content.splitlines()

    assert lines[0] == ",".join(EXPORT_HEADERS)
    assert lines[1] == "Ana Lima,Developer,Engineering,2026-03-02,09:05,17:35,8.5,Present"
    assert len(lines) == 3


def test_export_filename():
    assert export_filename(Period.PREVIOUS, date(2026, 3, 10)) == "attendance_report_previous_2026-03-10.csv"


def test_employee_summaries():
    summaries = employee_summaries(_records(), EMPLOYEES)

    assert len(summaries) == 1
    assert summaries[0].present_count == 1
    assert summaries[0].average_hours == 8.5


def test_summary_generator_mentions_period_and_employees():
    text = SummaryReportGenerator().generate(_records(), EMPLOYEES, "Current Month")

    assert "Current Month" in text
    assert "Ana Lima" in text


class _BrokenGenerator:
    def generate(self, records, employees, period_label):
        raise RuntimeError("upstream unavailable")


def test_narrative_falls_back_when_generator_fails():
    svc = NarrativeReportService(_BrokenGenerator())

    assert svc.build(_records(), EMPLOYEES, "Current Month") == FALLBACK_REPORT
