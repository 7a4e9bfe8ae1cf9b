from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..employees.model import Employee
from .calculator.base import StatsCalculator
from .calculator.standard_calculator import StandardStatsCalculator

logger = logging.getLogger(__name__)

FALLBACK_REPORT = "Unable to generate report at this time."


@dataclass(frozen=True)
class EmployeeSummary:
    name: str
    role: str
    present_count: int
    late_count: int
    average_hours: float


class ReportGenerator(Protocol):
    """Narrative report collaborator; the returned text is opaque."""

    def generate(self, records: Sequence[AttendanceRecord], employees: Sequence[Employee], period_label: str) -> str:
        raise NotImplementedError


def employee_summaries(
    records: Iterable[AttendanceRecord],
    employees: Sequence[Employee],
    *,
    calculator: Optional[StatsCalculator] = None,
) -> list[EmployeeSummary]:
    calculator = calculator or StandardStatsCalculator()
    items = list(records)
    summaries = []
    for emp in employees:
        stats = calculator.compute(r for r in items if r.employee_id == emp.employee_id)
        summaries.append(
            EmployeeSummary(
                name=emp.name,
                role=emp.role,
                present_count=stats.present_count,
                late_count=stats.late_count,
                average_hours=round(stats.average_hours, 1),
            )
        )
    return summaries


class SummaryReportGenerator:
    """Deterministic Markdown report used when no external writer is wired."""

    def generate(self, records: Sequence[AttendanceRecord], employees: Sequence[Employee], period_label: str) -> str:
        summaries = employee_summaries(records, employees)
        lines = [f"## Attendance summary: {period_label}", ""]
        if not summaries:
            lines.append("No employees in the directory.")
            return "\n".join(lines)

        lines.append("| Employee | Role | Present | Late | Avg hours |")
        lines.append("|---|---|---|---|---|")
        for s in summaries:
            lines.append(f"| {s.name} | {s.role} | {s.present_count} | {s.late_count} | {s.average_hours:.1f} |")

        frequent_late = [s.name for s in summaries if s.late_count >= 3]
        if frequent_late:
            lines += ["", f"Frequent late arrivals: {', '.join(frequent_late)}."]
        return "\n".join(lines)


class NarrativeReportService:
    """Use case: produce display text for the manager's report panel."""

    def __init__(self, generator: Optional[ReportGenerator] = None):
        self._generator = generator or SummaryReportGenerator()

    def build(self, records: Sequence[AttendanceRecord], employees: Sequence[Employee], period_label: str) -> str:
        try:
            text = self._generator.generate(records, employees, period_label)
        except Exception:
            logger.exception("narrative report generation failed for %s", period_label)
            return FALLBACK_REPORT
        return text or FALLBACK_REPORT
