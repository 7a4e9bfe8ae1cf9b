from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        date=normalize_mysql_date(r["date"]),
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        duration_hours=float(r.get("duration_hours") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_records(self, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        sql = """
            SELECT id, employee_id, date, check_in, check_out, status, duration_hours
            FROM attendance_records
        """
        params: tuple = ()
        if employee_id is not None:
            sql += " WHERE employee_id=%s"
            params = (employee_id,)
        sql += " ORDER BY date DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_record(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(id, employee_id, date, check_in, check_out, status, duration_hours)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in=VALUES(check_in),
                    check_out=VALUES(check_out),
                    status=VALUES(status),
                    duration_hours=VALUES(duration_hours)
                """,
                (
                    record.id,
                    record.employee_id,
                    record.date,
                    record.check_in,
                    record.check_out,
                    record.status.value,
                    record.duration_hours,
                ),
            )

    def delete_record(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
