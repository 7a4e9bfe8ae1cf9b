from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_DEPARTMENT
from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Directory entry used as a join target for display and export.

    Owned by the directory; read-only here.
    """

    employee_id: str
    name: str
    role: str
    department: str = DEFAULT_DEPARTMENT
    avatar: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "role": self.role,
            "department": self.department,
            "avatar": self.avatar,
        }


@dataclass(frozen=True)
class Profile:
    """The signed-in actor."""

    profile_id: str
    name: str
    email: str
    role: Role
    avatar: Optional[str] = None
    department: Optional[str] = None
    role_title: Optional[str] = None

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    def to_dict(self) -> dict:
        return {
            "id": self.profile_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "avatar": self.avatar,
            "department": self.department,
            "roleTitle": self.role_title,
        }
