from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        token = container.auth_service.login(data.get("username", ""), data.get("password", ""))
        return jsonify({"success": True, "token": token})

    @app.route("/api/session", methods=["GET"], endpoint="session_info")
    @login_required
    def session_info():
        return jsonify({"success": True, "username": g.current_user.username, "role": g.current_user.role.value})
