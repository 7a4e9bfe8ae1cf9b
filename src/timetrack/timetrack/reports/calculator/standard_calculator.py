from __future__ import annotations

from typing import Iterable

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import round_half_up
from ...core.enums import AttendanceStatus
from ..model import AttendanceStats
from .base import StatsCalculator


class StandardStatsCalculator(StatsCalculator):
    """Standard rule: Present and Late count as attended, everything else only
    in the denominator (Half Day is not credited as full attendance).

    The same computation serves a whole team or a single employee; the caller
    picks the record set.
    """

    def compute(self, records: Iterable[AttendanceRecord]) -> AttendanceStats:
        items = list(records)
        count = len(items)
        present = sum(1 for r in items if r.status == AttendanceStatus.PRESENT)
        late = sum(1 for r in items if r.status == AttendanceStatus.LATE)
        total = round(sum(r.duration_hours for r in items), 2)

        if count == 0:
            return AttendanceStats(
                total_hours=0.0,
                average_hours=0.0,
                attendance_rate=0,
                late_count=0,
                present_count=0,
                record_count=0,
            )

        return AttendanceStats(
            total_hours=total,
            average_hours=round(total / count, 2),
            attendance_rate=int(round_half_up(100 * (present + late) / count)),
            late_count=late,
            present_count=present,
            record_count=count,
        )
