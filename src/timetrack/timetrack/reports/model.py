from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_duration
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceStats:
    total_hours: float
    average_hours: float
    attendance_rate: int
    late_count: int
    present_count: int
    record_count: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_hours_label"] = format_duration(self.total_hours)
        data["average_hours_label"] = format_duration(self.average_hours)
        return data


@dataclass(frozen=True)
class DailyPoint:
    """One chart point: hours worked and people present on a date."""

    date: date
    hours: float
    present: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "label": self.date.strftime("%d %b"), "hours": self.hours, "present": self.present}


@dataclass(frozen=True)
class EmployeeStatsRow:
    employee: Employee
    stats: AttendanceStats


@dataclass(frozen=True)
class EmployeeOverview:
    """Employee self-service view of one period."""

    records: list[AttendanceRecord]
    stats: AttendanceStats
    series: list[DailyPoint]
    today_record: Optional[AttendanceRecord]


@dataclass(frozen=True)
class TeamOverview:
    """Manager view of one period."""

    records: list[AttendanceRecord]
    stats: AttendanceStats
    series: list[DailyPoint]
    per_employee: list[EmployeeStatsRow]
