from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from ..core.constants import USER_ID_COOKIE, USER_ID_COOKIE_MAX_AGE


def register(app: Flask, container: Container) -> None:
    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        user_id = container.tracker.login(body.get("userId"))

        resp = jsonify({"ok": True})
        resp.set_cookie(
            USER_ID_COOKIE,
            user_id,
            max_age=USER_ID_COOKIE_MAX_AGE,
            path="/",
            httponly=True,
            secure=bool(app.config.get("COOKIE_SECURE", False)),
            samesite="Lax",
        )
        return resp

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        resp = jsonify({"ok": True})
        resp.delete_cookie(USER_ID_COOKIE, path="/", httponly=True, samesite="Lax")
        return resp
