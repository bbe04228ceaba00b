from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.constants import USER_ID_COOKIE
from ..core.enums import ErrorKind
from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from .validators import require_user_id

logger = logging.getLogger(__name__)

# Both single-open-session violations are reported as 400 to clients.
STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.STORAGE: 503,
}


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def _identity_from_request() -> str | None:
    uid = (request.cookies.get(USER_ID_COOKIE) or "").strip()
    if uid:
        return uid

    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def login_required(view):
    """Resolve the opaque user id into ``g.user_id`` or fail with 401.

    The cookie or bearer value must pass the same format check as login, so a
    malformed id never becomes a user scope.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        raw = _identity_from_request()
        if not raw:
            raise AuthenticationError("login required")
        try:
            user_id = require_user_id(raw)
        except ValidationError:
            logger.debug("Rejected malformed identity on %s", request.path)
            raise AuthenticationError("login required")
        g.user_id = user_id
        return view(*args, **kwargs)

    return wrapper


def json_body(*, required: bool = True) -> dict:
    """Request JSON object, or {} when optional and absent/malformed."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    if required:
        raise ValidationError("Invalid request body")
    return {}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = STATUS_BY_KIND.get(exc.kind, 500)
        if exc.kind is ErrorKind.STORAGE:
            logger.error("Storage failure on %s: %s", request.path, exc.message)
        else:
            logger.debug("Rejected %s %s: %s", request.method, request.path, exc.message)
        return error_response(exc.message, status)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return error_response(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled exception on %s", request.path)
        return error_response("internal error", 500)
