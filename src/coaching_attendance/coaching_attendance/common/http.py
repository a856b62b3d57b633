from __future__ import annotations

from datetime import date
from functools import wraps

from flask import Flask, current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_any_date, today_local


def login_required(view):
    """Require `Authorization: Bearer <token>` issued by POST /api/login."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        token = header[7:].strip() if header.lower().startswith("bearer ") else ""
        container = current_app.extensions["container"]
        g.current_user = container.auth_service.require(token)
        return view(*args, **kwargs)

    return wrapper


def date_arg(name: str = "date") -> date:
    value = request.args.get(name) or (request.get_json(silent=True) or {}).get(name)
    if not value:
        return today_local()
    try:
        return parse_any_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value}")


def csv_response(app: Flask, text: str, filename: str):
    # utf-8-sig so spreadsheet apps detect the encoding.
    return app.response_class(
        text.encode("utf-8-sig"),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def register_error_handlers(app: Flask) -> None:
    status_by_type = (
        (AuthenticationError, 401),
        (AuthorizationError, 403),
        (NotFoundError, 404),
        (ValidationError, 400),
    )

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = next((code for exc_type, code in status_by_type if isinstance(e, exc_type)), 400)
        return jsonify({"success": False, "message": str(e)}), status

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "message": "Internal server error"}), 500
