from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...attendance.model import AttendanceRecord
from ..model import AttendanceStats


class StatsCalculator(ABC):
    """Calculator interface (Strategy Pattern for period statistics)."""

    @abstractmethod
    def compute(self, records: Iterable[AttendanceRecord]) -> AttendanceStats:
        raise NotImplementedError
