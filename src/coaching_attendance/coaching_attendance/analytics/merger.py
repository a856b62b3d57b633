from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord, MergedAttendanceRow
from ..core.enums import AttendanceStatus
from ..students.model import Student
from .ordering import display_roll, sort_roster

logger = logging.getLogger(__name__)


def merge_attendance(
    students: Sequence[Student],
    records: Iterable[AttendanceRecord],
) -> list[MergedAttendanceRow]:
    """Combine a batch roster with the records of one date.

    Every student yields exactly one row, in roster order. Students without a
    record are Absent: a day counts as present only when it was marked so.
    Records for students that are not on the roster are ignored.
    """

    by_student: dict[str, AttendanceRecord] = {}
    for r in records:
        by_student[r.student_id] = r

    ordered = sort_roster(students)
    roster_ids = {s.student_id for s in ordered}
    orphans = [sid for sid in by_student if sid not in roster_ids]
    if orphans:
        logger.debug("Dropping %d attendance record(s) outside the roster", len(orphans))

    rows: list[MergedAttendanceRow] = []
    for position, student in enumerate(ordered, start=1):
        record = by_student.get(student.student_id)
        rows.append(
            MergedAttendanceRow(
                student=student,
                status=record.status if record else AttendanceStatus.ABSENT,
                display_roll=display_roll(student, position),
                attendance_id=record.attendance_id if record else None,
            )
        )
    return rows


def filter_rows(rows: Sequence[MergedAttendanceRow], query: str) -> list[MergedAttendanceRow]:
    """Search by name or stored roll number.

    Rows keep the display roll computed on the full roster.
    """
    q = (query or "").strip().lower()
    if not q:
        return list(rows)
    return [
        r
        for r in rows
        if q in r.student.name.lower() or (r.student.roll_number and q in r.student.roll_number.lower())
    ]


def with_status(rows: Sequence[MergedAttendanceRow], status: AttendanceStatus) -> list[MergedAttendanceRow]:
    return [
        MergedAttendanceRow(student=r.student, status=status, display_roll=r.display_roll, attendance_id=r.attendance_id)
        for r in rows
    ]


def count_by_status(rows: Iterable[MergedAttendanceRow]) -> dict[AttendanceStatus, int]:
    counts = {AttendanceStatus.PRESENT: 0, AttendanceStatus.ABSENT: 0}
    for r in rows:
        counts[AttendanceStatus.PRESENT if r.is_present else AttendanceStatus.ABSENT] += 1
    return counts


def absentee_names(rows: Iterable[MergedAttendanceRow]) -> list[str]:
    return [r.student.display_name for r in rows if not r.is_present]
