from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

SESSION_EMAIL_KEY = "email"


def error_response(kind: str, message: str, status: int):
    return jsonify({"success": False, "error": kind, "message": message}), status


def json_body(*, allow_form: bool = False):
    """Request payload as a mapping; anything other than a JSON object is rejected."""
    data = request.get_json(silent=True)
    if data is None:
        return request.form if allow_form else {}
    if not isinstance(data, dict):
        raise ValidationError("Invalid request body")
    return data


def login_required(view):
    """Reject requests without a signed-in session before the view runs."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(SESSION_EMAIL_KEY):
            raise UnauthorizedError("Unauthorized")
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.http_status >= 500:
            logger.error("%s: %s", e.kind, e)
        return error_response(e.kind, str(e) or e.kind, e.http_status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        kind = (e.name or "error").lower().replace(" ", "_")
        return error_response(kind, e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return error_response("internal", "Internal server error", 500)
