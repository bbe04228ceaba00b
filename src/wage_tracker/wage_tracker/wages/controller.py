from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import error_response, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/wage", methods=["GET"], endpoint="get_wage")
    @login_required
    def get_wage():
        setting = container.tracker.get_wage(g.user_id)
        if setting is None:
            return error_response("Wage is not set", 404)
        return jsonify(setting.to_dict())

    @app.route("/wage", methods=["POST"], endpoint="set_wage")
    @login_required
    def set_wage():
        body = json_body()
        setting = container.tracker.set_wage(g.user_id, body.get("hourlyWage"))
        return jsonify(setting.to_dict())
