from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ..core.constants import DEFAULT_LATE_THRESHOLD
from ..core.enums import MANUAL_STATUSES, AttendanceStatus
from ..core.exceptions import ValidationError
from .factory import AttendanceStrategyFactory

_factory = AttendanceStrategyFactory()


def classify_status(
    check_in: Optional[datetime],
    check_out_present: bool = False,
    *,
    manual_status: Optional[AttendanceStatus] = None,
    late_threshold: time = DEFAULT_LATE_THRESHOLD,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceStatus:
    """Derive the status from the check-in clock time.

    Status tracks punctuality only, so ``check_out_present`` never changes the
    outcome. Without a check-in the record is Absent, or On Leave / Half Day
    when one of those was set explicitly.
    """
    if manual_status is not None:
        if manual_status not in MANUAL_STATUSES:
            raise ValidationError(f"Status '{manual_status.value}' cannot be set manually")
        if check_in is not None:
            raise ValidationError(f"Status '{manual_status.value}' cannot be combined with a check-in")

    strategy = (factory or _factory).for_record(
        check_in=check_in,
        late_threshold=late_threshold,
        manual_status=manual_status,
    )
    return strategy.decide(check_in=check_in, late_threshold=late_threshold).status
