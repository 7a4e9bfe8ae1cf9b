from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.web import error_response, login_required, mutation_response, requested_period
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, ValidationError
from ..employees.controller import SessionUnavailable, current_session, unavailable_response

logger = logging.getLogger(__name__)


def _parse_manual_form(body: dict):
    try:
        check_in = parse_iso_datetime(body["checkIn"]) if body.get("checkIn") else None
        check_out = parse_iso_datetime(body["checkOut"]) if body.get("checkOut") else None
    except ValueError:
        raise ValidationError("Times must be ISO timestamps") from None

    manual_status = None
    if body.get("status"):
        try:
            manual_status = AttendanceStatus(body["status"])
        except ValueError:
            raise ValidationError(f"Unknown status '{body['status']}'") from None
    return check_in, check_out, manual_status


def _parse_day(value) -> date:
    if not value:
        raise ValidationError("Date is required")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD") from None


def register(app: Flask, container: Container) -> None:
    wait = container.persist_wait_seconds

    @app.route("/api/me/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        try:
            s = current_session(container)
            period = requested_period()
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)

        today = container.clock().date()
        overview = container.stats_service.employee_overview(
            s.records, s.profile.profile_id, period=period, today=today
        )
        history = container.attendance_service.history_for(s.profile.profile_id, s.records)
        return jsonify(
            {
                "success": True,
                "period": period.value,
                "today": overview.today_record.to_dict() if overview.today_record else None,
                "stats": overview.stats.to_dict(),
                "series": [p.to_dict() for p in overview.series],
                "records": [r.to_dict() for r in overview.records],
                "history": [r.to_dict() for r in history],
                "errors": [e.reason for e in s.errors],
            }
        )

    @app.route("/api/me/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        try:
            mutation = current_session(container).check_in(container.clock())
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)
        return mutation_response(mutation, wait_seconds=wait, status=201)

    @app.route("/api/me/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        try:
            mutation = current_session(container).check_out(container.clock())
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)
        return mutation_response(mutation, wait_seconds=wait)

    @app.route("/api/me/records", methods=["POST"], endpoint="create_record")
    @login_required
    def create_record():
        body = request.get_json(silent=True) or {}
        try:
            day = _parse_day(body.get("date"))
            check_in, check_out, manual_status = _parse_manual_form(body)
            mutation = current_session(container).save_manual(
                day,
                check_in,
                check_out,
                is_new_record=True,
                today=container.clock().date(),
                manual_status=manual_status,
            )
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)
        return mutation_response(mutation, wait_seconds=wait, status=201)

    @app.route("/api/me/records/<day>", methods=["PUT"], endpoint="edit_record")
    @login_required
    def edit_record(day: str):
        body = request.get_json(silent=True) or {}
        try:
            check_in, check_out, manual_status = _parse_manual_form(body)
            mutation = current_session(container).save_manual(
                _parse_day(day),
                check_in,
                check_out,
                is_new_record=False,
                today=container.clock().date(),
                manual_status=manual_status,
            )
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)
        return mutation_response(mutation, wait_seconds=wait)

    @app.route("/api/me/records/<record_id>", methods=["DELETE"], endpoint="delete_record")
    @login_required
    def delete_record(record_id: str):
        try:
            mutation = current_session(container).delete(record_id)
        except SessionUnavailable as e:
            return unavailable_response(e)
        except DomainError as e:
            return error_response(e)
        return mutation_response(mutation, wait_seconds=wait)
