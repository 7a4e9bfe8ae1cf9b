from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_FETCH_RETRIES, DEFAULT_FETCH_RETRY_BACKOFF_SECONDS
from ..core.enums import LoadStatus
from .model import Employee, Profile
from .repository import EmployeeDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """What a freshly signed-in actor gets: either data or a visible failure."""

    status: LoadStatus
    profile: Optional[Profile] = None
    records: tuple[AttendanceRecord, ...] = ()
    employees: tuple[Employee, ...] = ()
    error: Optional[str] = None
    attempts: int = 0

    @property
    def ready(self) -> bool:
        return self.status == LoadStatus.READY


@dataclass
class SessionLoader:
    """Use case: load profile and records right after authentication.

    The profile row may not be visible yet right after sign-up, so the
    profile fetch is retried a fixed number of times with a fixed pause.
    Once retries are exhausted the load fails for good; it never keeps
    loading.
    """

    directory: EmployeeDirectory
    attendance: AttendanceRepository
    retries: int = DEFAULT_FETCH_RETRIES
    backoff_seconds: float = DEFAULT_FETCH_RETRY_BACKOFF_SECONDS
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def load(self, profile_id: str) -> SessionState:
        profile_id = require_non_empty(profile_id, "Profile id")

        profile, error, attempts = self._fetch_profile(profile_id)
        if profile is None:
            logger.error("giving up on profile %s after %d attempts: %s", profile_id, attempts, error)
            return SessionState(status=LoadStatus.FAILED, error=error, attempts=attempts)

        try:
            employees = tuple(self.directory.list_employees())
            # Managers oversee everyone; employees only ever see their own records.
            owner = None if profile.is_manager else profile.profile_id
            records = tuple(self.attendance.list_records(owner))
        except Exception as exc:
            logger.error("failed to load attendance data for %s: %s", profile_id, exc)
            return SessionState(
                status=LoadStatus.FAILED,
                profile=profile,
                error=f"Could not load attendance data: {exc}",
                attempts=attempts,
            )

        logger.info("session ready for %s (%d records)", profile_id, len(records))
        return SessionState(
            status=LoadStatus.READY,
            profile=profile,
            records=records,
            employees=employees,
            attempts=attempts,
        )

    def _fetch_profile(self, profile_id: str) -> tuple[Optional[Profile], Optional[str], int]:
        error: Optional[str] = None
        max_attempts = max(int(self.retries), 0) + 1

        for attempt in range(1, max_attempts + 1):
            try:
                profile = self.directory.get_profile(profile_id)
            except Exception as exc:
                profile = None
                error = f"Profile fetch failed: {exc}"
            else:
                if profile is not None:
                    return profile, None, attempt
                error = "Profile not found"

            if attempt < max_attempts:
                logger.warning("profile %s not available (attempt %d/%d): %s", profile_id, attempt, max_attempts, error)
                self.sleep(self.backoff_seconds)

        return None, error, max_attempts
