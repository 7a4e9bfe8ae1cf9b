from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Check-in before the late threshold."""

    def decide(self, *, check_in: Optional[datetime], late_threshold: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
