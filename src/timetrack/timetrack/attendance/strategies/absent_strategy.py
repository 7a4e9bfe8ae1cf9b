from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


@dataclass(frozen=True)
class AbsentStrategy(AttendanceStrategy):
    """No check-in: Absent, unless leave or half day was set by hand."""

    manual_status: Optional[AttendanceStatus] = None

    def decide(self, *, check_in: Optional[datetime], late_threshold: time) -> StatusDecision:
        return StatusDecision(status=self.manual_status or AttendanceStatus.ABSENT)
