"""REST API routes for inspecting and seeding the session's cookie jar."""
from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from ..services.errors import SessionError
from ..services.session import Session

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _session() -> Session:
    return current_app.config["COOKIE_SESSION"]


@api_bp.errorhandler(SessionError)
def _handle_session_error(exc: SessionError):
    payload = {"error": str(exc)}
    if exc.path is not None:
        payload["path"] = str(exc.path)
    return jsonify(payload), HTTPStatus.BAD_REQUEST


@api_bp.get("/cookies")
def list_cookies():
    records = _session().get_cookie_store().to_records()
    domain = request.args.get("domain")
    if domain:
        records = [record for record in records if record["domain"] == domain]
    return jsonify({"cookies": records})


@api_bp.post("/cookies")
def add_cookie():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict) or not data.get("name"):
        return jsonify({"error": "a cookie object with a name is required"}), HTTPStatus.BAD_REQUEST
    data.setdefault("value", "")

    try:
        cookie = _session().get_cookie_store().add_record(data)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST

    return jsonify({"cookie": {"name": cookie.name, "domain": cookie.domain, "path": cookie.path}}), HTTPStatus.CREATED


@api_bp.delete("/cookies")
def clear_cookies():
    domain = request.args.get("domain")
    path = request.args.get("path")
    name = request.args.get("name")
    if (path or name) and not domain:
        return jsonify({"error": "domain is required when path or name is given"}), HTTPStatus.BAD_REQUEST
    if name and not path:
        return jsonify({"error": "path is required when name is given"}), HTTPStatus.BAD_REQUEST

    jar = _session().get_cookie_store()
    try:
        jar.clear(domain, path, name)
    except KeyError:
        return jsonify({"error": "no matching cookies"}), HTTPStatus.NOT_FOUND

    return jsonify({"status": "ok"})


@api_bp.post("/cookies/save")
def save_cookies():
    path = _session().save()
    return jsonify({"path": str(path)})
