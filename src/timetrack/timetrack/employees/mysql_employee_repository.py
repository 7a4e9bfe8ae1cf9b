from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_DEPARTMENT
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, Profile
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, role, role_title, department, avatar
                FROM profiles
                ORDER BY name ASC
                """
            )
            return [
                Employee(
                    employee_id=str(r["id"]),
                    name=r["name"],
                    role=r.get("role_title") or r["role"],
                    department=r.get("department") or DEFAULT_DEPARTMENT,
                    avatar=r.get("avatar"),
                )
                for r in fetchall(cur)
            ]

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, email, role, avatar, department, role_title
                FROM profiles
                WHERE id=%s
                """,
                (profile_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Profile(
                profile_id=str(row["id"]),
                name=row["name"],
                email=row["email"],
                role=Role(row["role"]),
                avatar=row.get("avatar"),
                department=row.get("department"),
                role_title=row.get("role_title"),
            )
