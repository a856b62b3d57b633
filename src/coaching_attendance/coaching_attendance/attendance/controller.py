from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import date_arg, login_required
from ..common.validators import require_status
from ..container import Container
from ..students.controller import student_to_dict
from .model import MergedAttendanceRow


def row_to_dict(r: MergedAttendanceRow) -> dict:
    data = student_to_dict(r.student)
    data.update({"status": r.status.value, "display_roll": r.display_roll, "attendance_id": r.attendance_id})
    return data


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/<batch>", methods=["GET"], endpoint="attendance_sheet")
    @login_required
    def attendance_sheet(batch: str):
        day = date_arg()
        sheet = svc.load_sheet(batch, day, query=request.args.get("q", ""))
        return jsonify(
            {
                "success": True,
                "batch": sheet.batch,
                "date": day.isoformat(),
                "total": sheet.total,
                "present": sheet.present,
                "absent": sheet.absent,
                "rows": [row_to_dict(r) for r in sheet.rows],
            }
        )

    @app.route("/api/attendance/<batch>", methods=["POST"], endpoint="save_attendance")
    @login_required
    def save_attendance(batch: str):
        data = request.get_json(silent=True) or {}
        day = date_arg()
        result = svc.save_sheet(batch, day, data.get("statuses") or {})
        return jsonify({"success": True, "saved": result.saved, "absentees": result.absentees})

    @app.route("/api/attendance/<batch>/mark-all", methods=["POST"], endpoint="mark_all_attendance")
    @login_required
    def mark_all_attendance(batch: str):
        data = request.get_json(silent=True) or {}
        day = date_arg()
        result = svc.mark_all(batch, day, require_status(data.get("status", "")))
        return jsonify({"success": True, "saved": result.saved, "absentees": result.absentees})

    @app.route("/api/attendance/<batch>/absentees", methods=["GET"], endpoint="absentee_message")
    @login_required
    def absentee_message(batch: str):
        return jsonify({"success": True, "message": svc.absentee_message(batch, date_arg())})
