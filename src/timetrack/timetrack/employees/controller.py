from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError
from ..reconciliation.session import AttendanceSession
from .service import SessionState

logger = logging.getLogger(__name__)


class SessionUnavailable(Exception):
    """The actor's data could not be loaded; the view shows a failure state."""

    def __init__(self, state: SessionState):
        super().__init__(state.error or "Session could not be loaded")
        self.state = state


def build_session(container: Container, state: SessionState) -> AttendanceSession:
    return AttendanceSession(
        state.profile,
        container.attendance_service,
        container.reconciliation_service,
        state.records,
    )


def open_session(container: Container, state: SessionState) -> AttendanceSession:
    """Register a freshly loaded session, replacing any previous one."""
    return container.sessions.put(build_session(container, state))


def current_session(container: Container) -> AttendanceSession:
    """Session of the signed-in profile, reloading it after a restart."""
    profile_id = str(session["user_id"])

    def load() -> AttendanceSession:
        state = container.session_loader.load(profile_id)
        if not state.ready:
            raise SessionUnavailable(state)
        return build_session(container, state)

    return container.sessions.get_or_create(profile_id, load)


def unavailable_response(exc: SessionUnavailable):
    return jsonify({"success": False, "status": exc.state.status.value, "message": str(exc)}), 503


def register(app: Flask, container: Container) -> None:
    @app.route("/api/session", methods=["POST"], endpoint="session_open")
    def session_open():
        """Adopt a profile already authenticated upstream and load its data."""
        body = request.get_json(silent=True) or {}
        try:
            state = container.session_loader.load(str(body.get("profile_id") or ""))
        except DomainError as e:
            return error_response(e)

        if not state.ready:
            session.clear()
            return jsonify({"success": False, "status": state.status.value, "message": state.error}), 503

        open_session(container, state)
        session["user_id"] = state.profile.profile_id
        session["name"] = state.profile.name
        session["role"] = state.profile.role.value
        return jsonify(
            {
                "success": True,
                "status": state.status.value,
                "profile": state.profile.to_dict(),
                "records": len(state.records),
            }
        )

    @app.route("/api/session", methods=["GET"], endpoint="session_info")
    @login_required
    def session_info():
        try:
            s = current_session(container)
        except SessionUnavailable as e:
            return unavailable_response(e)
        return jsonify(
            {
                "success": True,
                "profile": s.profile.to_dict(),
                "errors": [e.reason for e in s.errors],
            }
        )

    @app.route("/api/session", methods=["DELETE"], endpoint="session_close")
    def session_close():
        if "user_id" in session:
            container.sessions.close(str(session["user_id"]))
        session.clear()
        return jsonify({"success": True})
