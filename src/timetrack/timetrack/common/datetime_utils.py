from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from ..core.constants import DURATION_DECIMALS

DateLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO timestamp into a naive local datetime.

    Accepts the browser-style trailing ``Z`` and drops any offset, since
    records only care about the local calendar date and clock time.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1]
    return datetime.fromisoformat(value).replace(tzinfo=None)


def parse_hhmm(value: str) -> time:
    hh, mm = value.split(":")
    return time(int(hh), int(mm))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_duration_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> float:
    """Elapsed hours between two instants, rounded to two decimals.

    Returns 0 when either side is missing. Callers must reject
    ``check_out < check_in`` before calling; the result is floored at 0 anyway.
    """
    if check_in is None or check_out is None:
        return 0.0
    hours = (check_out - check_in).total_seconds() / 3600
    return max(round_half_up(hours, DURATION_DECIMALS), 0.0)


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def is_within_period(day: DateLike, period_start: DateLike, period_end: DateLike) -> bool:
    """Inclusive calendar-date membership."""
    return _as_date(period_start) <= _as_date(day) <= _as_date(period_end)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def current_month_bounds(reference: DateLike) -> tuple[date, date]:
    ref = _as_date(reference)
    return month_bounds(ref.year, ref.month)


def previous_month_bounds(reference: DateLike) -> tuple[date, date]:
    first_of_current = _as_date(reference).replace(day=1)
    last_of_previous = first_of_current - timedelta(days=1)
    return month_bounds(last_of_previous.year, last_of_previous.month)


def format_duration(hours: float) -> str:
    """Render decimal hours as ``"8h 30m"``."""
    total_minutes = int(round_half_up(hours * 60))
    return f"{total_minutes // 60}h {total_minutes % 60}m"
