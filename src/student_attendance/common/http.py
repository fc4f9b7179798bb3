from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    TransientIOError,
    ValidationError,
)
from .datetime_utils import parse_iso_date
from .serialization import to_jsonable

logger = logging.getLogger(__name__)


def ok(payload: Any = None, status: int = 200):
    body = {"success": True}
    if payload is not None:
        body["data"] = to_jsonable(payload)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_user_id() -> Optional[int]:
    """Identity of the signed-in user, or None."""
    value = session.get("user_id")
    return int(value) if value is not None else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user_id() is None:
            return fail("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(value: Optional[str], field_name: str, *, default: Optional[date] = None) -> date:
    if not value:
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None


def int_arg(value: Optional[object], field_name: str) -> Optional[int]:
    if value in (None, "", "all"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return fail(str(e), 401)

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return fail(str(e), 409)

    @app.errorhandler(TransientIOError)
    def _transient(e: TransientIOError):
        logger.error("database unavailable on %s %s: %s", request.method, request.path, e)
        return fail("The database is unavailable, please try again", 503)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return fail(str(e), 400)
