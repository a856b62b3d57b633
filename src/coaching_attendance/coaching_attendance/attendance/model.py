from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the stored status of one student on one date."""

    student_id: str
    attendance_date: date
    status: AttendanceStatus
    attendance_id: Optional[int] = None


@dataclass(frozen=True)
class MergedAttendanceRow:
    """A roster student with its resolved status for one date.

    `display_roll` is the stored roll number, or the student's 1-based position
    in the ordered full roster when none is stored.
    """

    student: Student
    status: AttendanceStatus
    display_roll: str
    attendance_id: Optional[int] = None

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT


@dataclass(frozen=True)
class AbsenteeStats:
    """Read-model supplied by the store for risk analysis."""

    student: Student
    total_absent: int
    recent_statuses: tuple[AttendanceStatus, ...] = field(default_factory=tuple)
