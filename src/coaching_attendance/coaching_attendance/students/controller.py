from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.http import csv_response, login_required
from ..container import Container
from .model import Student


def student_to_dict(s: Student) -> dict:
    return {
        "id": s.student_id,
        "name": s.display_name,
        "batch": s.batch,
        "sex": s.sex,
        "roll_number": s.roll_number,
        "created_at": s.created_at.isoformat() if s.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    svc = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @login_required
    def list_students():
        q = request.args.get("q", "")
        batch = request.args.get("batch")
        students = svc.search(q) if q else svc.list_students(batch=batch)
        return jsonify({"success": True, "students": [student_to_dict(s) for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @login_required
    def create_student():
        data = request.get_json(silent=True) or {}
        student_id = svc.create_student(
            name=data.get("name", ""),
            batch=data.get("batch", ""),
            sex=data.get("sex", ""),
            roll_number=data.get("roll_number"),
        )
        return jsonify({"success": True, "id": student_id}), 201

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    @login_required
    def update_student(student_id: str):
        data = request.get_json(silent=True) or {}
        svc.update_student(
            student_id=student_id,
            name=data.get("name", ""),
            batch=data.get("batch", ""),
            sex=data.get("sex", ""),
            roll_number=data.get("roll_number"),
        )
        return jsonify({"success": True})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @login_required
    def delete_student(student_id: str):
        svc.delete_student(student_id)
        return jsonify({"success": True})

    @app.route("/api/students/import", methods=["POST"], endpoint="import_students")
    @login_required
    def import_students():
        upload = request.files.get("file")
        text = upload.read().decode("utf-8-sig") if upload else request.get_data(as_text=True)
        result = svc.import_csv(text)
        return jsonify({"success": True, "imported": result.imported, "skipped": result.skipped})

    @app.route("/api/students/export.csv", methods=["GET"], endpoint="export_students")
    @login_required
    def export_students():
        filename = f"students_export_{date.today().isoformat()}.csv"
        return csv_response(app, svc.export_csv(), filename)

    @app.route("/api/students/template.csv", methods=["GET"], endpoint="students_template")
    def students_template():
        return csv_response(app, svc.csv_template(), "student_import_template.csv")

    @app.route("/api/batches/<batch>/roll-numbers", methods=["POST"], endpoint="assign_roll_numbers")
    @login_required
    def assign_roll_numbers(batch: str):
        count = svc.auto_assign_roll_numbers(batch)
        return jsonify({"success": True, "assigned": count})
