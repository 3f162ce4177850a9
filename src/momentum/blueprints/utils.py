"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from typing import Any

from flask import abort, current_app, jsonify, make_response, request
from pydantic import ValidationError

from ..context import AppContext

USER_HEADER = "X-User-Id"


def app_context() -> AppContext:
    """The ``AppContext`` attached to the running Flask app."""
    return current_app.extensions["momentum"]


def current_user_id() -> int:
    """Resolve the caller identity supplied by the upstream auth layer."""

    raw = request.headers.get(USER_HEADER, "").strip()
    if not raw.isdigit():
        abort(_error(401, "unauthorized", f"Missing or invalid {USER_HEADER} header."))
    user_id = int(raw)
    if app_context().user_repo.get_by_id(user_id) is None:
        abort(_error(401, "unknown_user", f"User {user_id} does not exist."))
    return user_id


def request_payload() -> dict[str, Any]:
    """JSON body, falling back to form fields."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by the field they belong to."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


def _error(status: int, code: str, message: str):
    return make_response(jsonify({"error": code, "message": message}), status)


def error_response(status: int, code: str, message: str, **extra: Any):
    body = {"error": code, "message": message, **extra}
    return jsonify(body), status
