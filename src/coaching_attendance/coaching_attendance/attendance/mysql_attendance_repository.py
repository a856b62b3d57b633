from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from ..common.validators import normalize_roll_number
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, placeholders
from ..students.model import Student
from .model import AbsenteeStats, AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        student_id=str(r["student_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        attendance_id=int(r["attendance_id"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_students_and_date(self, student_ids: Sequence[str], attendance_date: date) -> Sequence[AttendanceRecord]:
        if not student_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, student_id, attendance_date, status
                FROM attendance
                WHERE attendance_date=%s AND student_id IN ({placeholders(len(student_ids))})
                """,
                (attendance_date, *student_ids),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_present_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, attendance_date, status
                FROM attendance
                WHERE attendance_date=%s AND status=%s
                """,
                (attendance_date, AttendanceStatus.PRESENT.value),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_student(
        self,
        student_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["student_id=%s"]
        params: list[object] = [student_id]

        if start_date is not None:
            clauses.append("attendance_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("attendance_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, student_id, attendance_date, status
                FROM attendance
                WHERE {where}
                ORDER BY attendance_date DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_many(self, *, attendance_date: date, statuses: dict[str, AttendanceStatus]) -> int:
        if not statuses:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance(student_id, attendance_date, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                [(sid, attendance_date, status.value) for sid, status in statuses.items()],
            )
        return len(statuses)

    def get_absentee_stats(self, *, history_limit: int, batch: Optional[str] = None) -> Sequence[AbsenteeStats]:
        student_where = "WHERE s.batch=%s" if batch else ""
        student_params: tuple = (batch,) if batch else ()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.student_id, s.name, s.batch, s.sex, s.roll_number, s.created_at,
                       COALESCE(SUM(a.status=%s), 0) AS total_absent
                FROM students s
                LEFT JOIN attendance a ON a.student_id = s.student_id
                {student_where}
                GROUP BY s.student_id, s.name, s.batch, s.sex, s.roll_number, s.created_at
                """,
                (AttendanceStatus.ABSENT.value, *student_params),
            )
            students = fetchall(cur)

            cur.execute(
                f"""
                SELECT student_id, status FROM (
                    SELECT a.student_id, a.status, a.attendance_date,
                           ROW_NUMBER() OVER (PARTITION BY a.student_id ORDER BY a.attendance_date DESC) AS rn
                    FROM attendance a
                    JOIN students s ON s.student_id = a.student_id
                    {student_where}
                ) ranked
                WHERE rn <= %s
                ORDER BY student_id, attendance_date DESC
                """,
                (*student_params, int(history_limit)),
            )
            history: dict[str, list[AttendanceStatus]] = defaultdict(list)
            for r in fetchall(cur):
                history[str(r["student_id"])].append(AttendanceStatus(r["status"]))

        return [
            AbsenteeStats(
                student=Student(
                    student_id=str(r["student_id"]),
                    name=r["name"],
                    batch=r["batch"],
                    sex=r["sex"],
                    roll_number=normalize_roll_number(r.get("roll_number")),
                    created_at=r.get("created_at"),
                ),
                total_absent=int(r["total_absent"] or 0),
                recent_statuses=tuple(history.get(str(r["student_id"]), ())),
            )
            for r in students
        ]

    def delete_all(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance")
