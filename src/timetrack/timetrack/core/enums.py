from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the signed-in profile, drives which views are reachable."""

    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class AttendanceStatus(str, Enum):
    """Attendance status as persisted and displayed."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "Half Day"
    ON_LEAVE = "On Leave"


# Only settable through an explicit manual edit, never by check-in.
MANUAL_STATUSES = frozenset({AttendanceStatus.HALF_DAY, AttendanceStatus.ON_LEAVE})

# Statuses credited as attended in the attendance rate.
ATTENDED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


class Period(str, Enum):
    """Calendar-month window selectable in both dashboards."""

    CURRENT = "current"
    PREVIOUS = "previous"

    @property
    def label(self) -> str:
        return "Current Month" if self is Period.CURRENT else "Previous Month"


class LoadStatus(str, Enum):
    """Outcome of loading a session after authentication."""

    READY = "READY"
    FAILED = "FAILED"
