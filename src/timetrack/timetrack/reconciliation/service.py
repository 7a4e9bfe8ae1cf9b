from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_PERSIST_WORKERS
from ..core.exceptions import PersistError

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Forwards already-applied local mutations to the remote store.

    Calls return immediately with a ``Future``. A transport failure resolves
    the future with ``PersistError``; nothing is retried and local state is
    left as it is, so the initiating caller decides whether to retry by hand.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        executor: Executor | None = None,
        max_workers: int = DEFAULT_PERSIST_WORKERS,
    ):
        self._attendance = attendance
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="persist")

    def persist(self, record: AttendanceRecord) -> "Future[None]":
        return self._executor.submit(self._run, "save", record.id, self._attendance.upsert_record, record)

    def persist_delete(self, record_id: str) -> "Future[None]":
        return self._executor.submit(self._run, "delete", record_id, self._attendance.delete_record, record_id)

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, action: str, record_id: str, call: Callable, arg) -> None:
        try:
            result = call(arg)
        except Exception as exc:
            logger.error("failed to %s record %s: %s", action, record_id, exc)
            raise PersistError(f"Failed to {action} record: {exc}", reason=str(exc) or type(exc).__name__) from exc

        if action == "delete" and result is False:
            logger.debug("record %s was already absent from the store", record_id)
        logger.debug("%s %s confirmed", action, record_id)
