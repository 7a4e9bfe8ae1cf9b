from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Persistence collaborator for attendance records.

    Field naming on the storage side is the implementation's concern; services
    only ever see ``AttendanceRecord``.
    """

    def list_records(self, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert_record(self, record: AttendanceRecord) -> None:
        """Create-or-replace keyed by ``record.id``."""

        raise NotImplementedError

    def delete_record(self, record_id: str) -> bool:
        raise NotImplementedError
