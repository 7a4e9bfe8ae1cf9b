from __future__ import annotations

import logging
from concurrent.futures import TimeoutError as FutureTimeoutError
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Period, Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    DuplicateRecordError,
    NotFoundError,
    PersistError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(exc: DomainError):
    """Map domain errors onto JSON responses."""
    if isinstance(exc, DuplicateRecordError):
        status = 409
    elif isinstance(exc, ValidationError):
        status = 400
    elif isinstance(exc, NotFoundError):
        status = 404
    elif isinstance(exc, AuthorizationError):
        status = 403
    elif isinstance(exc, PersistError):
        status = 502
    else:
        status = 400
    return jsonify({"success": False, "message": str(exc)}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        if session.get("role") != Role.MANAGER.value:
            return jsonify({"success": False, "message": "Manager access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def requested_period() -> Period:
    raw = (request.args.get("period") or Period.CURRENT.value).lower()
    try:
        return Period(raw)
    except ValueError:
        raise ValidationError(f"Unknown period '{raw}'") from None


def mutation_response(mutation, *, wait_seconds: float, status: int = 200):
    """Answer with the optimistic record once the store has confirmed or failed.

    A failed write still echoes the record: it stays in local state until the
    user retries or edits it.
    """
    payload = {"record": mutation.record.to_dict(), "deleted": mutation.deleted}
    try:
        error: Optional[PersistError] = mutation.wait(timeout=wait_seconds)
    except FutureTimeoutError:
        payload.update(success=True, pending=True)
        return jsonify(payload), 202

    if error is not None:
        payload.update(success=False, pending=False, message=f"Failed to save record: {error.reason}")
        return jsonify(payload), 502

    payload.update(success=True, pending=False)
    return jsonify(payload), status
