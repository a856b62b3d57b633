from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..common.validators import normalize_roll_number
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, batch, sex, roll_number, created_at"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["student_id"]),
        name=r["name"],
        batch=r["batch"],
        sex=r["sex"],
        roll_number=normalize_roll_number(r.get("roll_number")),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY created_at DESC")
            return [_to_student(r) for r in fetchall(cur)]

    def list_by_batch(self, batch: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE batch=%s", (batch,))
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(self, *, name: str, batch: str, sex: str, roll_number: Optional[str]) -> str:
        student_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(student_id, name, batch, sex, roll_number)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (student_id, name, batch, sex, roll_number),
            )
        return student_id

    def create_many(self, rows: Sequence[dict]) -> int:
        if not rows:
            return 0
        params = [
            (str(uuid.uuid4()), r["name"], r["batch"], r["sex"], r.get("roll_number"))
            for r in rows
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO students(student_id, name, batch, sex, roll_number)
                VALUES(%s,%s,%s,%s,%s)
                """,
                params,
            )
        return len(params)

    def update(self, *, student_id: str, name: str, batch: str, sex: str, roll_number: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, batch=%s, sex=%s, roll_number=%s
                WHERE student_id=%s
                """,
                (name, batch, sex, roll_number, student_id),
            )
            return cur.rowcount > 0

    def set_roll_numbers(self, assignments: dict[str, str]) -> int:
        if not assignments:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "UPDATE students SET roll_number=%s WHERE student_id=%s",
                [(roll, sid) for sid, roll in assignments.items()],
            )
        return len(assignments)

    def delete_by_id(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (student_id,))
            return cur.rowcount > 0

    def delete_all(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance")
            cur.execute("DELETE FROM students")
