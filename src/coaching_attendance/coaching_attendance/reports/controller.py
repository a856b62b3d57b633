from __future__ import annotations

from flask import Flask, jsonify, request

from ..analytics.risk import StudentRisk
from ..attendance.controller import row_to_dict
from ..common.datetime_utils import parse_any_date, today_local
from ..common.http import csv_response, date_arg, login_required
from ..common.validators import require_batch
from ..container import Container
from ..core.exceptions import ValidationError
from ..students.controller import student_to_dict


def risk_to_dict(r: StudentRisk) -> dict:
    data = student_to_dict(r.student)
    data.update(
        {
            "total_absent": r.stats.total_absent,
            "recent_statuses": [s.value for s in r.stats.recent_statuses],
            "consecutive_days": r.assessment.consecutive_days,
            "weekly_count": r.assessment.weekly_count,
            "risk_type": r.assessment.risk_type.value,
            "issue": r.issue_label,
            "recent_pattern": r.recent_pattern,
        }
    )
    return data


def register(app: Flask, container: Container) -> None:
    svc = container.report_service

    def _range_args():
        today = today_local()
        try:
            start = parse_any_date(request.args["start"]) if request.args.get("start") else today.replace(day=1)
            end = parse_any_date(request.args["end"]) if request.args.get("end") else today
        except ValueError:
            raise ValidationError("Invalid start/end date")
        return start, end

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        day = date_arg()
        stats = svc.dashboard(day)
        return jsonify(
            {
                "success": True,
                "date": day.isoformat(),
                "total_students": stats.total_students,
                "total_present": stats.total_present,
                "percentage": stats.percentage,
                "batches": [
                    {
                        "batch": b.batch,
                        "total_students": b.total_students,
                        "present": b.present,
                        "percentage": b.percentage,
                    }
                    for b in stats.batches
                ],
            }
        )

    @app.route("/api/reports/daily/<batch>", methods=["GET"], endpoint="daily_report")
    @login_required
    def daily_report(batch: str):
        report = svc.daily_batch_report(batch, date_arg())
        return jsonify(
            {
                "success": True,
                "batch": report.batch,
                "date": report.attendance_date.isoformat(),
                "present": report.present,
                "absent": report.absent,
                "rows": [row_to_dict(r) for r in report.rows],
            }
        )

    @app.route("/api/reports/daily/<batch>/csv", methods=["GET"], endpoint="daily_report_csv")
    @login_required
    def daily_report_csv(batch: str):
        report = svc.daily_batch_report(batch, date_arg())
        filename = f"Attendance_{report.batch}_{report.attendance_date.isoformat()}.csv"
        return csv_response(app, svc.daily_report_csv(report), filename)

    @app.route("/api/reports/students/<student_id>", methods=["GET"], endpoint="student_report")
    @login_required
    def student_report(student_id: str):
        start, end = _range_args()
        report = svc.student_report(student_id, start=start, end=end)
        s = report.summary
        return jsonify(
            {
                "success": True,
                "student": student_to_dict(report.student),
                "start": start.isoformat(),
                "end": end.isoformat(),
                "present": s.present,
                "absent": s.absent,
                "percentage": s.percentage,
                "details": [{"date": r.attendance_date.isoformat(), "status": r.status.value} for r in s.details],
            }
        )

    @app.route("/api/reports/risk", methods=["GET"], endpoint="risk_report")
    @login_required
    def risk_report():
        grouped = svc.risk_report(batch=request.args.get("batch") or None)
        return jsonify(
            {
                "success": True,
                "counts": {batch: len(items) for batch, items in grouped.items()},
                "batches": {batch: [risk_to_dict(r) for r in items] for batch, items in grouped.items()},
            }
        )

    @app.route("/api/reports/risk/<batch>/csv", methods=["GET"], endpoint="risk_report_csv")
    @login_required
    def risk_report_csv(batch: str):
        batch = require_batch(batch)
        risks = svc.risk_report(batch=batch)[batch]
        filename = f"Risk_Report_{batch}_{today_local().isoformat()}.csv"
        return csv_response(app, svc.risk_report_csv(batch, risks), filename)
