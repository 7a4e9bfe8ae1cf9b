from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.exceptions import (
    FutureDateError,
    InvalidTimeRangeError,
    OutsideBackfillWindowError,
    ValidationError,
)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_time_order(check_in: Optional[datetime], check_out: Optional[datetime]) -> None:
    if check_in is not None and check_out is not None and check_out < check_in:
        raise InvalidTimeRangeError("Check-out time cannot be before check-in time.")


def require_not_future(day: date, today: date) -> date:
    if day > today:
        raise FutureDateError("Cannot add records for future dates.")
    return day


def require_on_or_after(day: date, earliest: date) -> date:
    if day < earliest:
        raise OutsideBackfillWindowError(
            f"Records can only be added from {earliest.isoformat()} onwards."
        )
    return day


def require_on_day(check_in: Optional[datetime], check_out: Optional[datetime], day: date) -> None:
    """Check-in falls on the record's date; check-out on it or the next one (overnight shift)."""
    if check_in is not None and check_in.date() != day:
        raise InvalidTimeRangeError(f"Check-in must be on {day.isoformat()}.")
    if check_out is not None and check_out.date() not in (day, day + timedelta(days=1)):
        raise InvalidTimeRangeError(f"Check-out must be on {day.isoformat()} or the following day.")


def require_times_not_future(check_in: Optional[datetime], check_out: Optional[datetime], today: date) -> None:
    for value in (check_in, check_out):
        if value is not None and value.date() > today:
            raise FutureDateError("Cannot record times in the future.")
