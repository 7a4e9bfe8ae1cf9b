from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import error_response, manager_required, requested_period
from ..container import Container
from ..core.exceptions import DomainError
from ..employees.controller import SessionUnavailable, current_session, unavailable_response
from ..reports.export import build_export_rows, export_filename, write_csv
from ..reports.service import records_in_period

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _team_records(refresh: bool = False):
        s = current_session(container)
        if refresh:
            s.replace_records(container.attendance_repo.list_records())
        return s.records

    @app.route("/api/team/attendance", methods=["GET"], endpoint="team_attendance")
    @manager_required
    def team_attendance():
        try:
            records = _team_records(refresh=request.args.get("refresh") == "1")
            period = requested_period()
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)

        employees = list(container.directory.list_employees())
        overview = container.stats_service.team_overview(
            records, employees, period=period, today=container.clock().date()
        )
        return jsonify(
            {
                "success": True,
                "period": period.value,
                "stats": overview.stats.to_dict(),
                "series": [p.to_dict() for p in overview.series],
                "employees": [
                    {**row.employee.to_dict(), "stats": row.stats.to_dict()} for row in overview.per_employee
                ],
                "records": [r.to_dict() for r in overview.records],
            }
        )

    @app.route("/api/team/employees/<employee_id>", methods=["GET"], endpoint="team_employee_detail")
    @manager_required
    def team_employee_detail(employee_id: str):
        try:
            records = _team_records()
            period = requested_period()
            employee, overview = container.stats_service.employee_detail(
                records,
                list(container.directory.list_employees()),
                employee_id,
                period=period,
                today=container.clock().date(),
            )
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "period": period.value,
                "employee": employee.to_dict(),
                "stats": overview.stats.to_dict(),
                "series": [p.to_dict() for p in overview.series],
                "records": [r.to_dict() for r in overview.records],
            }
        )

    @app.route("/api/team/report.csv", methods=["GET"], endpoint="team_report_csv")
    @manager_required
    def team_report_csv():
        try:
            records = _team_records()
            period = requested_period()
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)

        today = container.clock().date()
        selected = records_in_period(records, period, today)
        employee_id = request.args.get("employee_id")
        if employee_id:
            selected = [r for r in selected if r.employee_id == employee_id]

        rows = build_export_rows(selected, list(container.directory.list_employees()))
        return app.response_class(
            write_csv(rows),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export_filename(period, today)}"},
        )

    @app.route("/api/team/narrative", methods=["POST"], endpoint="team_narrative")
    @manager_required
    def team_narrative():
        try:
            records = _team_records()
            period = requested_period()
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)

        selected = records_in_period(records, period, container.clock().date())
        text = container.narrative_service.build(selected, list(container.directory.list_employees()), period.label)
        return jsonify({"success": True, "period": period.value, "report": text})
