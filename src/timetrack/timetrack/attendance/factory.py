from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_record(
        self,
        *,
        check_in: Optional[datetime],
        late_threshold: time,
        manual_status: Optional[AttendanceStatus] = None,
    ) -> AttendanceStrategy:
        if check_in is None:
            return AbsentStrategy(manual_status=manual_status)

        if check_in.time() >= late_threshold:
            return LateStrategy()
        return PresentStrategy()
