from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping

from ..analytics.merger import absentee_names, count_by_status, filter_rows, merge_attendance, with_status
from ..common.datetime_utils import format_display_date
from ..common.validators import require_batch, require_status
from ..core.constants import DEFAULT_CENTER_NAME
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.repository import StudentRepository
from .model import MergedAttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSheet:
    batch: str
    attendance_date: date
    rows: list[MergedAttendanceRow]
    total: int
    present: int
    absent: int


@dataclass(frozen=True)
class SaveResult:
    saved: int
    absentees: list[str]


class AttendanceService:
    """Use case: take and save daily attendance for one batch."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        center_name: str = DEFAULT_CENTER_NAME,
    ):
        self._attendance = attendance
        self._students = students
        self._center_name = center_name

    def _merged(self, batch: str, day: date) -> list[MergedAttendanceRow]:
        roster = self._students.list_by_batch(batch)
        records = self._attendance.get_for_students_and_date([s.student_id for s in roster], day)
        return merge_attendance(roster, records)

    def load_sheet(self, batch: str, day: date, *, query: str = "") -> AttendanceSheet:
        batch = require_batch(batch)
        rows = self._merged(batch, day)
        counts = count_by_status(rows)
        return AttendanceSheet(
            batch=batch,
            attendance_date=day,
            rows=filter_rows(rows, query),
            total=len(rows),
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
        )

    def save_sheet(self, batch: str, day: date, statuses: Mapping[str, object]) -> SaveResult:
        """Upsert a status for every student of the batch.

        Students missing from `statuses` are saved as Absent.
        """
        if not isinstance(statuses, Mapping):
            raise ValidationError("statuses must be an object of student id to status")
        batch = require_batch(batch)
        roster = self._students.list_by_batch(batch)
        roster_ids = {s.student_id for s in roster}

        unknown = [sid for sid in statuses if sid not in roster_ids]
        if unknown:
            raise ValidationError(f"{len(unknown)} student(s) are not in {batch}")

        resolved = {sid: require_status(str(getattr(v, "value", v))) for sid, v in statuses.items()}
        to_save = {s.student_id: resolved.get(s.student_id, AttendanceStatus.ABSENT) for s in roster}

        saved = self._attendance.upsert_many(attendance_date=day, statuses=to_save)
        logger.info("Saved attendance for %s on %s (%d row(s))", batch, day.isoformat(), saved)

        rows = self._merged(batch, day)
        return SaveResult(saved=saved, absentees=absentee_names(rows))

    def mark_all(self, batch: str, day: date, status: AttendanceStatus) -> SaveResult:
        rows = with_status(self._merged(require_batch(batch), day), status)
        return self.save_sheet(batch, day, {r.student.student_id: r.status for r in rows})

    def absentee_message(self, batch: str, day: date) -> str:
        """Plain-text absentee list for sharing with parents' groups."""
        batch = require_batch(batch)
        names = absentee_names(self._merged(batch, day))
        lines = [
            f"*{self._center_name}*",
            f"Batch: {batch}",
            f"Date: {format_display_date(day)}",
            "",
            "*Absentees:*",
        ]
        lines.extend(f"{i}. {name}" for i, name in enumerate(names, start=1))
        if not names:
            lines.append("None")
        return "\n".join(lines)
