from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


def record_id_for(employee_id: str, day: date) -> str:
    """Deterministic record id: one record per employee per calendar date."""
    return f"{employee_id}-{day.isoformat()}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar date."""

    id: str
    employee_id: str
    date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    duration_hours: float = 0.0

    @property
    def is_checked_in(self) -> bool:
        return self.check_in is not None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": self.date.isoformat(),
            "checkIn": self.check_in.isoformat() if self.check_in else None,
            "checkOut": self.check_out.isoformat() if self.check_out else None,
            "status": self.status.value,
            "durationHours": self.duration_hours,
        }


@dataclass(frozen=True)
class AttendanceExportRow:
    """Read-model for export: a record joined with employee identity."""

    employee_name: str
    role: str
    department: str
    date: str
    check_in: str
    check_out: str
    duration_hours: float
    status: str
