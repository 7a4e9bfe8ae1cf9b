from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local, parse_hhmm
from .core import constants
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory
from .employees.service import SessionLoader
from .reconciliation.service import ReconciliationService
from .reconciliation.session import SessionRegistry
from .reports.narrative import NarrativeReportService, ReportGenerator
from .reports.service import StatsService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    directory: EmployeeDirectory

    attendance_service: AttendanceService
    reconciliation_service: ReconciliationService
    session_loader: SessionLoader
    stats_service: StatsService
    narrative_service: NarrativeReportService
    sessions: SessionRegistry

    clock: Callable[[], datetime] = now_local
    persist_wait_seconds: float = constants.DEFAULT_PERSIST_WAIT_SECONDS


def build_container(
    settings: Any,
    *,
    attendance_repo: Optional[AttendanceRepository] = None,
    directory: Optional[EmployeeDirectory] = None,
    executor: Optional[Executor] = None,
    report_generator: Optional[ReportGenerator] = None,
    clock: Callable[[], datetime] = now_local,
    sleep: Optional[Callable[[float], None]] = None,
) -> Container:
    """Wire services from a settings module (or any object with the same attributes).

    Repositories default to MySQL; pass in-memory ones to run without a database.
    """
    conn = None
    if attendance_repo is None or directory is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        attendance_repo = attendance_repo or MySQLAttendanceRepository(conn)
        directory = directory or MySQLEmployeeDirectory(conn)

    late_threshold = parse_hhmm(str(getattr(settings, "LATE_THRESHOLD", "10:00")))

    attendance_service = AttendanceService(
        strategy_factory=AttendanceStrategyFactory(),
        late_threshold=late_threshold,
    )
    reconciliation_service = ReconciliationService(
        attendance_repo,
        executor=executor,
        max_workers=int(getattr(settings, "PERSIST_WORKERS", constants.DEFAULT_PERSIST_WORKERS)),
    )
    loader_kwargs = {}
    if sleep is not None:
        loader_kwargs["sleep"] = sleep
    session_loader = SessionLoader(
        directory,
        attendance_repo,
        retries=int(getattr(settings, "FETCH_RETRIES", constants.DEFAULT_FETCH_RETRIES)),
        backoff_seconds=float(
            getattr(settings, "FETCH_RETRY_BACKOFF_SECONDS", constants.DEFAULT_FETCH_RETRY_BACKOFF_SECONDS)
        ),
        **loader_kwargs,
    )
    stats_service = StatsService(
        chart_window=int(getattr(settings, "CHART_WINDOW_DAYS", constants.DEFAULT_CHART_WINDOW_DAYS)),
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        directory=directory,
        attendance_service=attendance_service,
        reconciliation_service=reconciliation_service,
        session_loader=session_loader,
        stats_service=stats_service,
        narrative_service=NarrativeReportService(report_generator),
        sessions=SessionRegistry(),
        clock=clock,
        persist_wait_seconds=float(getattr(settings, "PERSIST_WAIT_SECONDS", constants.DEFAULT_PERSIST_WAIT_SECONDS)),
    )
