from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .admin.service import AdminService
from .analytics.risk import build_policy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_CENTER_NAME, DEFAULT_SESSION_MAX_AGE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService
    report_service: ReportService
    admin_service: AdminService


def build_services(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    settings: Any,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""

    policy = build_policy(
        getattr(settings, "RISK_POLICY", "combined"),
        streak_threshold=int(getattr(settings, "STREAK_THRESHOLD", 3)),
        frequent_threshold=int(getattr(settings, "FREQUENT_THRESHOLD", 2)),
        week_window=int(getattr(settings, "WEEK_WINDOW", 6)),
    )
    password_hash = str(getattr(settings, "ADMIN_PASSWORD_HASH", ""))

    return Container(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(
            secret_key=str(getattr(settings, "SECRET_KEY")),
            username=str(getattr(settings, "ADMIN_USERNAME", "admin")),
            password_hash=password_hash,
            max_age_seconds=int(getattr(settings, "SESSION_MAX_AGE_SECONDS", DEFAULT_SESSION_MAX_AGE_SECONDS)),
        ),
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            students_repo,
            center_name=str(getattr(settings, "CENTER_NAME", DEFAULT_CENTER_NAME)),
        ),
        report_service=ReportService(students_repo, attendance_repo, policy=policy),
        admin_service=AdminService(students_repo, attendance_repo, password_hash=password_hash),
    )


def build_container(*, settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
    return build_services(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings=settings,
    )
