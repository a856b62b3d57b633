from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.admin_service

    @app.route("/api/admin/clear-attendance", methods=["POST"], endpoint="clear_attendance")
    @login_required
    def clear_attendance():
        data = request.get_json(silent=True) or {}
        svc.clear_attendance(password=data.get("password", ""))
        return jsonify({"success": True, "message": "Attendance history cleared"})

    @app.route("/api/admin/reset", methods=["POST"], endpoint="reset_system")
    @login_required
    def reset_system():
        data = request.get_json(silent=True) or {}
        svc.reset_system(password=data.get("password", ""), confirmation=data.get("confirmation", ""))
        return jsonify({"success": True, "message": "System completely reset"})
