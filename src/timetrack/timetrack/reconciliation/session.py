from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, NotCheckedInError, PersistError
from ..employees.model import Profile
from .local_state import apply_optimistic, apply_optimistic_delete
from .service import ReconciliationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mutation:
    """A locally applied change and its pending persistence."""

    record: AttendanceRecord
    future: "Future[None]"
    deleted: bool = False

    def wait(self, timeout: Optional[float] = None) -> Optional[PersistError]:
        """Block until the store answers; return the failure, if any."""
        error = self.future.exception(timeout=timeout)
        if error is None:
            return None
        if isinstance(error, PersistError):
            return error
        return PersistError(str(error), reason=type(error).__name__)


class AttendanceSession:
    """Client-held record state of one signed-in actor.

    Mutations are validated by the lifecycle service against this state, then
    applied locally before the store confirms (read-your-writes for the actor).
    Failed writes are kept in ``errors`` and surfaced through the returned
    ``Mutation``; they are neither retried nor rolled back.
    """

    def __init__(
        self,
        profile: Profile,
        lifecycle: AttendanceService,
        reconciler: ReconciliationService,
        records: Iterable[AttendanceRecord] = (),
    ):
        self._profile = profile
        self._lifecycle = lifecycle
        self._reconciler = reconciler
        self._records: tuple[AttendanceRecord, ...] = tuple(records)
        self._errors: list[PersistError] = []
        self._lock = threading.RLock()

    @property
    def profile(self) -> Profile:
        return self._profile

    @property
    def records(self) -> tuple[AttendanceRecord, ...]:
        return self._records

    @property
    def errors(self) -> list[PersistError]:
        with self._lock:
            return list(self._errors)

    def replace_records(self, records: Iterable[AttendanceRecord]) -> None:
        with self._lock:
            self._records = tuple(records)

    def today_record(self, today: date) -> Optional[AttendanceRecord]:
        return self._lifecycle.today_record(self._profile.profile_id, today, self._records)

    def check_in(self, now: datetime) -> Mutation:
        with self._lock:
            record = self._lifecycle.check_in(self._profile.profile_id, now, self._records)
            return self._commit(record)

    def check_out(self, now: datetime) -> Mutation:
        with self._lock:
            existing = self.today_record(now.date())
            if existing is None:
                raise NotCheckedInError("You have not checked in today")
            record = self._lifecycle.check_out(existing, now)
            return self._commit(record)

    def save_manual(
        self,
        day: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        *,
        is_new_record: bool,
        today: date,
        manual_status: Optional[AttendanceStatus] = None,
    ) -> Mutation:
        with self._lock:
            record = self._lifecycle.manual_upsert(
                self._profile.profile_id,
                day,
                check_in,
                check_out,
                is_new_record=is_new_record,
                records=self._records,
                today=today,
                manual_status=manual_status,
            )
            return self._commit(record)

    def delete(self, record_id: str) -> Mutation:
        with self._lock:
            existing = self._lifecycle.delete(record_id, self._records)
            if existing.employee_id != self._profile.profile_id and not self._profile.is_manager:
                raise AuthorizationError("You can only delete your own records")
            self._records = apply_optimistic_delete(self._records, record_id)
            future = self._reconciler.persist_delete(record_id)
            future.add_done_callback(self._track_failure)
            return Mutation(record=existing, future=future, deleted=True)

    def _commit(self, record: AttendanceRecord) -> Mutation:
        self._records = apply_optimistic(self._records, record)
        future = self._reconciler.persist(record)
        future.add_done_callback(self._track_failure)
        return Mutation(record=record, future=future)

    def _track_failure(self, future: "Future[None]") -> None:
        error = future.exception()
        if error is None:
            return
        if not isinstance(error, PersistError):
            error = PersistError(str(error), reason=type(error).__name__)
        with self._lock:
            self._errors.append(error)
        logger.warning("persistence failed for %s, local state kept: %s", self._profile.profile_id, error.reason)


class SessionRegistry:
    """In-process map of open sessions keyed by profile id."""

    def __init__(self):
        self._sessions: dict[str, AttendanceSession] = {}
        self._lock = threading.Lock()

    def put(self, session: AttendanceSession) -> AttendanceSession:
        with self._lock:
            self._sessions[session.profile.profile_id] = session
        return session

    def get_or_create(self, profile_id: str, factory: Callable[[], AttendanceSession]) -> AttendanceSession:
        """Return the open session, building one when missing.

        ``factory`` runs outside the lock (it may hit the store and back off);
        when two callers race, the first registered session wins and the other
        build is discarded before anything was applied to it.
        """
        with self._lock:
            existing = self._sessions.get(profile_id)
        if existing is not None:
            return existing

        created = factory()
        with self._lock:
            return self._sessions.setdefault(profile_id, created)

    def get(self, profile_id: str) -> Optional[AttendanceSession]:
        with self._lock:
            return self._sessions.get(profile_id)

    def close(self, profile_id: str) -> None:
        with self._lock:
            self._sessions.pop(profile_id, None)
