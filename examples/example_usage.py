"""Example: use the service layer without Flask.

Controllers are thin; the lifecycle, statistics and reconciliation rules live
in the services and can be driven directly.
"""

import importlib
from datetime import datetime

from config import get_settings_module

from timetrack.container import build_container
from timetrack.core.enums import Period
from timetrack.reconciliation.session import AttendanceSession


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    state = container.session_loader.load("employee-1")
    if not state.ready:
        print("session failed:", state.error)
        return

    session = AttendanceSession(
        state.profile, container.attendance_service, container.reconciliation_service, state.records
    )
    mutation = session.check_in(datetime.now())
    error = mutation.wait(timeout=5)
    print("checked in:", mutation.record.to_dict(), "error:", error)

    overview = container.stats_service.employee_overview(
        session.records, state.profile.profile_id, period=Period.CURRENT, today=datetime.now().date()
    )
    print(overview.stats.to_dict())
    container.reconciliation_service.shutdown()


if __name__ == "__main__":
    main()
