from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, Profile


class EmployeeDirectory(Protocol):
    """Read-only directory of profiles and employees.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError
