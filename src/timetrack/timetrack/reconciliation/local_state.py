from __future__ import annotations

from typing import Iterable

from ..attendance.model import AttendanceRecord


def apply_optimistic(local: Iterable[AttendanceRecord], record: AttendanceRecord) -> tuple[AttendanceRecord, ...]:
    """Replace the record with the same id, or append it."""
    items = tuple(local)
    if any(r.id == record.id for r in items):
        return tuple(record if r.id == record.id else r for r in items)
    return items + (record,)


def apply_optimistic_delete(local: Iterable[AttendanceRecord], record_id: str) -> tuple[AttendanceRecord, ...]:
    return tuple(r for r in local if r.id != record_id)
