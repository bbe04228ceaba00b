from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_year_month
from ..common.http import error_response, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/sessions", methods=["GET"], endpoint="list_sessions")
    @login_required
    def list_sessions():
        date_param = request.args.get("date")
        month_param = request.args.get("month")

        day = None
        if date_param is not None:
            try:
                day = parse_iso_date(date_param)
            except ValueError:
                raise ValidationError("Invalid date format. Expected YYYY-MM-DD")

        month = None
        if month_param is not None:
            try:
                month = parse_year_month(month_param)
            except ValueError:
                raise ValidationError("Invalid month format. Expected YYYY-MM")

        items = container.tracker.list_sessions(g.user_id, day=day, month=month)
        return jsonify([s.to_dict() for s in items])

    @app.route("/sessions/current", methods=["GET"], endpoint="current_session")
    @login_required
    def current_session():
        view = container.tracker.current_session(g.user_id)
        if view is None:
            return error_response("No active session", 404)
        return jsonify(view.to_dict())

    @app.route("/sessions/start", methods=["POST"], endpoint="start_session")
    @login_required
    def start_session():
        # The body is optional; a missing or malformed one means "no override".
        body = json_body(required=False)
        session = container.tracker.start_session(g.user_id, override_wage=body.get("hourlyWageOverride"))
        return jsonify(session.to_dict()), 201

    @app.route("/sessions/<session_id>/stop", methods=["POST"], endpoint="stop_session")
    @login_required
    def stop_session(session_id: str):
        session = container.tracker.stop_session(g.user_id, _parse_id(session_id))
        return jsonify(session.to_dict())

    @app.route("/sessions/<session_id>", methods=["PUT"], endpoint="update_session")
    @login_required
    def update_session(session_id: str):
        sid = _parse_id(session_id)
        body = json_body()
        session = container.tracker.update_session(
            g.user_id,
            sid,
            start_time=body.get("startTime"),
            end_time=body.get("endTime"),
        )
        return jsonify(session.to_dict())

    @app.route("/sessions/<session_id>", methods=["DELETE"], endpoint="delete_session")
    @login_required
    def delete_session(session_id: str):
        if not container.tracker.delete_session(g.user_id, _parse_id(session_id)):
            return error_response("Session not found", 404)
        return "", 204


def _parse_id(raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Invalid id")
