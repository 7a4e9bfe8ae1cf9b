from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord, record_id_for
from ..common.datetime_utils import current_month_bounds, is_within_period, previous_month_bounds
from ..core.constants import DEFAULT_CHART_WINDOW_DAYS
from ..core.enums import ATTENDED_STATUSES, Period
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from .calculator.base import StatsCalculator
from .calculator.standard_calculator import StandardStatsCalculator
from .model import AttendanceStats, DailyPoint, EmployeeOverview, EmployeeStatsRow, TeamOverview

_default_calculator = StandardStatsCalculator()


def compute_stats(records: Iterable[AttendanceRecord], *, calculator: Optional[StatsCalculator] = None) -> AttendanceStats:
    return (calculator or _default_calculator).compute(records)


def period_bounds(period: Period, today: date) -> tuple[date, date]:
    if period == Period.PREVIOUS:
        return previous_month_bounds(today)
    return current_month_bounds(today)


def records_in_period(records: Iterable[AttendanceRecord], period: Period, today: date) -> list[AttendanceRecord]:
    """Records of the selected calendar month, newest first."""
    start, end = period_bounds(period, today)
    selected = [r for r in records if is_within_period(r.date, start, end)]
    selected.sort(key=lambda r: r.date, reverse=True)
    return selected


def daily_series(records: Iterable[AttendanceRecord], *, window: int = DEFAULT_CHART_WINDOW_DAYS) -> list[DailyPoint]:
    """One point per distinct date, oldest first, limited to the ``window``
    most recent dates. The cap only bounds size; it does not filter.
    """
    hours: dict[date, float] = defaultdict(float)
    present: dict[date, int] = defaultdict(int)
    for r in records:
        hours[r.date] += r.duration_hours
        if r.status in ATTENDED_STATUSES:
            present[r.date] += 1

    days = sorted(hours)
    if window > 0:
        days = days[-window:]
    return [DailyPoint(date=d, hours=round(hours[d], 2), present=present[d]) for d in days]


class StatsService:
    """Use case: period statistics for the employee and manager views."""

    def __init__(
        self,
        *,
        calculator: Optional[StatsCalculator] = None,
        chart_window: int = DEFAULT_CHART_WINDOW_DAYS,
    ):
        self._calculator = calculator or _default_calculator
        self._chart_window = int(chart_window)

    def stats(self, records: Iterable[AttendanceRecord]) -> AttendanceStats:
        return compute_stats(records, calculator=self._calculator)

    def employee_overview(
        self,
        records: Iterable[AttendanceRecord],
        employee_id: str,
        *,
        period: Period,
        today: date,
    ) -> EmployeeOverview:
        own = [r for r in records if r.employee_id == employee_id]
        selected = records_in_period(own, period, today)
        today_id = record_id_for(employee_id, today)
        return EmployeeOverview(
            records=selected,
            stats=self.stats(selected),
            series=daily_series(selected, window=self._chart_window),
            today_record=next((r for r in own if r.id == today_id), None),
        )

    def team_overview(
        self,
        records: Iterable[AttendanceRecord],
        employees: Sequence[Employee],
        *,
        period: Period,
        today: date,
    ) -> TeamOverview:
        selected = records_in_period(records, period, today)
        by_employee: dict[str, list[AttendanceRecord]] = defaultdict(list)
        for r in selected:
            by_employee[r.employee_id].append(r)

        per_employee = [EmployeeStatsRow(employee=e, stats=self.stats(by_employee.get(e.employee_id, []))) for e in employees]
        per_employee.sort(key=lambda row: row.stats.total_hours, reverse=True)

        return TeamOverview(
            records=selected,
            stats=self.stats(selected),
            series=daily_series(selected, window=self._chart_window),
            per_employee=per_employee,
        )

    def employee_detail(
        self,
        records: Iterable[AttendanceRecord],
        employees: Sequence[Employee],
        employee_id: str,
        *,
        period: Period,
        today: date,
    ) -> tuple[Employee, EmployeeOverview]:
        employee = next((e for e in employees if e.employee_id == employee_id), None)
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee, self.employee_overview(records, employee_id, period=period, today=today)
