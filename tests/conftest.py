from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from typing import Optional, Sequence

import pytest
from werkzeug.security import generate_password_hash

from src.coaching_attendance.coaching_attendance.attendance.model import AbsenteeStats, AttendanceRecord
from src.coaching_attendance.coaching_attendance.core.enums import AttendanceStatus
from src.coaching_attendance.coaching_attendance.students.model import Student

ADMIN_PASSWORD = "wingster123"


class InMemoryStudents:
    def __init__(self, students: Sequence[Student] = ()):
        self._by_id: dict[str, Student] = {s.student_id: s for s in students}
        self._next = len(self._by_id)

    def _new_id(self) -> str:
        self._next += 1
        return f"s{self._next}"

    def list_all(self):
        return list(self._by_id.values())

    def list_by_batch(self, batch: str):
        return [s for s in self._by_id.values() if s.batch == batch]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._by_id.get(student_id)

    def create(self, *, name, batch, sex, roll_number):
        sid = self._new_id()
        self._by_id[sid] = Student(student_id=sid, name=name, batch=batch, sex=sex, roll_number=roll_number)
        return sid

    def create_many(self, rows):
        for r in rows:
            self.create(name=r["name"], batch=r["batch"], sex=r["sex"], roll_number=r.get("roll_number"))
        return len(rows)

    def update(self, *, student_id, name, batch, sex, roll_number):
        if student_id not in self._by_id:
            return False
        self._by_id[student_id] = Student(student_id=student_id, name=name, batch=batch, sex=sex, roll_number=roll_number)
        return True

    def set_roll_numbers(self, assignments):
        for sid, roll in assignments.items():
            s = self._by_id[sid]
            self._by_id[sid] = Student(student_id=sid, name=s.name, batch=s.batch, sex=s.sex, roll_number=roll)
        return len(assignments)

    def delete_by_id(self, student_id):
        return self._by_id.pop(student_id, None) is not None

    def delete_all(self):
        self._by_id.clear()


class InMemoryAttendance:
    def __init__(self, records: Sequence[AttendanceRecord] = ()):
        self._rows: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0
        for r in records:
            self._put(r.student_id, r.attendance_date, r.status)
        self.absentee_stats: list[AbsenteeStats] = []
        self.last_stats_args = None

    def _put(self, student_id, attendance_date, status):
        existing = self._rows.get((student_id, attendance_date))
        if existing:
            attendance_id = existing.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        self._rows[(student_id, attendance_date)] = AttendanceRecord(
            student_id=student_id,
            attendance_date=attendance_date,
            status=status,
            attendance_id=attendance_id,
        )

    def all(self):
        return list(self._rows.values())

    def get_for_students_and_date(self, student_ids, attendance_date):
        ids = set(student_ids)
        return [r for (sid, d), r in self._rows.items() if sid in ids and d == attendance_date]

    def get_present_for_date(self, attendance_date):
        return [r for r in self._rows.values() if r.attendance_date == attendance_date and r.status == AttendanceStatus.PRESENT]

    def get_for_student(self, student_id, *, start_date=None, end_date=None):
        rows = [
            r
            for r in self._rows.values()
            if r.student_id == student_id
            and (start_date is None or r.attendance_date >= start_date)
            and (end_date is None or r.attendance_date <= end_date)
        ]
        return sorted(rows, key=lambda r: r.attendance_date, reverse=True)

    def upsert_many(self, *, attendance_date, statuses):
        for sid, status in statuses.items():
            self._put(sid, attendance_date, status)
        return len(statuses)

    def get_absentee_stats(self, *, history_limit, batch=None):
        self.last_stats_args = {"history_limit": history_limit, "batch": batch}
        return [s for s in self.absentee_stats if batch is None or s.student.batch == batch]

    def delete_all(self):
        self._rows.clear()


def make_student(student_id: str, name: str, sex: str = "Male", batch: str = "S1", roll_number=None) -> Student:
    return Student(student_id=student_id, name=name, batch=batch, sex=sex, roll_number=roll_number)


@pytest.fixture
def settings():
    return SimpleNamespace(
        SECRET_KEY="test-secret",
        ADMIN_USERNAME="wings",
        ADMIN_PASSWORD_HASH=generate_password_hash(ADMIN_PASSWORD),
        SESSION_MAX_AGE_SECONDS=3600,
        RISK_POLICY="combined",
        STREAK_THRESHOLD=3,
        FREQUENT_THRESHOLD=2,
        WEEK_WINDOW=6,
        CENTER_NAME="Wings Coaching Center",
    )


@pytest.fixture
def roster():
    return [
        make_student("m1", "RAHUL K", "Male", "S1"),
        make_student("f1", "ANJALI P", "Female", "S1"),
        make_student("m2", "ARJUN M", "Male", "S1", roll_number="7"),
        make_student("f2", "DIYA S", "Female", "S1"),
        make_student("n1", "NIKHIL T", "Male", "N1"),
        make_student("n2", "MEERA V", "Female", "N1"),
    ]
