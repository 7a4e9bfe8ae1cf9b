from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, Sequence

from ..attendance.model import AttendanceExportRow, AttendanceRecord
from ..core.enums import Period
from ..employees.model import Employee

EXPORT_HEADERS = [
    "Employee Name",
    "Role",
    "Department",
    "Date",
    "Check In",
    "Check Out",
    "Duration (Hours)",
    "Status",
]


def build_export_rows(records: Iterable[AttendanceRecord], employees: Sequence[Employee]) -> list[AttendanceExportRow]:
    """Join records with employee identity into a flat table."""
    by_id = {e.employee_id: e for e in employees}
    rows: list[AttendanceExportRow] = []
    for r in records:
        emp = by_id.get(r.employee_id)
        rows.append(
            AttendanceExportRow(
                employee_name=emp.name if emp else "Unknown",
                role=emp.role if emp else "N/A",
                department=emp.department if emp else "N/A",
                date=r.date.isoformat(),
                check_in=r.check_in.strftime("%H:%M") if r.check_in else "-",
                check_out=r.check_out.strftime("%H:%M") if r.check_out else "-",
                duration_hours=r.duration_hours,
                status=r.status.value,
            )
        )
    return rows


def write_csv(rows: Iterable[AttendanceExportRow]) -> bytes:
    """Serialize export rows; BOM-prefixed so spreadsheet apps pick UTF-8."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for row in rows:
        writer.writerow(
            [
                row.employee_name,
                row.role,
                row.department,
                row.date,
                row.check_in,
                row.check_out,
                row.duration_hours,
                row.status,
            ]
        )
    return out.getvalue().encode("utf-8-sig")


def export_filename(period: Period, today: date) -> str:
    return f"attendance_report_{period.value}_{today.isoformat()}.csv"
