from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Iterable, Optional

from ..common.datetime_utils import compute_duration_hours, previous_month_bounds
from ..common.validators import (
    require_non_empty,
    require_not_future,
    require_on_day,
    require_on_or_after,
    require_time_order,
    require_times_not_future,
)
from ..core.constants import DEFAULT_LATE_THRESHOLD
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedOutError,
    DuplicateRecordError,
    InvalidTimeRangeError,
    NotCheckedInError,
    NotFoundError,
)
from .classifier import classify_status
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, record_id_for

logger = logging.getLogger(__name__)


class AttendanceService:
    """Record lifecycle: check-in, check-out, manual entry and deletion.

    Every existence check runs against the record set passed in by the caller
    (the actor's latest local state), never against the remote store. Clock
    values are always supplied explicitly.
    """

    def __init__(
        self,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        late_threshold: time = DEFAULT_LATE_THRESHOLD,
    ):
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._late_threshold = late_threshold

    @property
    def late_threshold(self) -> time:
        return self._late_threshold

    def _classify(self, check_in: Optional[datetime], check_out: Optional[datetime], manual_status=None):
        return classify_status(
            check_in,
            check_out is not None,
            manual_status=manual_status,
            late_threshold=self._late_threshold,
            factory=self._factory,
        )

    def find(self, record_id: str, records: Iterable[AttendanceRecord]) -> Optional[AttendanceRecord]:
        return next((r for r in records if r.id == record_id), None)

    def today_record(self, employee_id: str, today: date, records: Iterable[AttendanceRecord]) -> Optional[AttendanceRecord]:
        return self.find(record_id_for(employee_id, today), records)

    def history_for(self, employee_id: str, records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
        """Own records, newest first."""
        own = [r for r in records if r.employee_id == employee_id]
        own.sort(key=lambda r: r.date, reverse=True)
        return own

    def check_in(self, employee_id: str, now: datetime, records: Iterable[AttendanceRecord]) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "Employee id")
        today = now.date()

        existing = self.today_record(employee_id, today, records)
        if existing and existing.is_checked_in:
            raise DuplicateRecordError("You have already checked in today")

        record = AttendanceRecord(
            id=record_id_for(employee_id, today),
            employee_id=employee_id,
            date=today,
            check_in=now,
            check_out=None,
            status=self._classify(now, None),
            duration_hours=0.0,
        )
        logger.info("check-in %s at %s (%s)", record.id, now.strftime("%H:%M:%S"), record.status.value)
        return record

    def check_out(self, existing: AttendanceRecord, now: datetime) -> AttendanceRecord:
        if existing.check_in is None:
            raise NotCheckedInError("You have not checked in for this day")
        if existing.check_out is not None:
            raise AlreadyCheckedOutError("You have already checked out; edit the record instead")
        if now < existing.check_in:
            raise InvalidTimeRangeError("Check-out time cannot be before check-in time.")

        record = replace(
            existing,
            check_out=now,
            duration_hours=compute_duration_hours(existing.check_in, now),
        )
        logger.info("check-out %s at %s (%.2fh)", record.id, now.strftime("%H:%M:%S"), record.duration_hours)
        return record

    def manual_upsert(
        self,
        employee_id: str,
        day: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        *,
        is_new_record: bool,
        records: Iterable[AttendanceRecord],
        today: date,
        manual_status: Optional[AttendanceStatus] = None,
    ) -> AttendanceRecord:
        """Create or replace a record from user-supplied times.

        Either time may be missing; the duration then stays 0. Check-in must
        fall on ``day``, check-out on ``day`` or the day after, neither after
        ``today``. Status is
        always recomputed, a caller may only pick On Leave / Half Day for a
        record without check-in.
        """
        employee_id = require_non_empty(employee_id, "Employee id")
        require_not_future(day, today)

        record_id = record_id_for(employee_id, day)
        existing = self.find(record_id, records)
        if is_new_record:
            if existing:
                raise DuplicateRecordError(
                    "A record already exists for this date. Please edit the existing record instead."
                )
            window_start, _ = previous_month_bounds(today)
            require_on_or_after(day, window_start)
        elif not existing:
            raise NotFoundError(f"No attendance record for {day.isoformat()}")

        require_time_order(check_in, check_out)
        require_on_day(check_in, check_out, day)
        require_times_not_future(check_in, check_out, today)

        record = AttendanceRecord(
            id=record_id,
            employee_id=employee_id,
            date=day,
            check_in=check_in,
            check_out=check_out,
            status=self._classify(check_in, check_out, manual_status),
            duration_hours=compute_duration_hours(check_in, check_out),
        )
        logger.info("manual %s %s (%s)", "create" if is_new_record else "edit", record.id, record.status.value)
        return record

    def delete(self, record_id: str, records: Iterable[AttendanceRecord]) -> AttendanceRecord:
        existing = self.find(record_id, records)
        if not existing:
            raise NotFoundError(f"Attendance record '{record_id}' not found")
        logger.info("delete %s", record_id)
        return existing
