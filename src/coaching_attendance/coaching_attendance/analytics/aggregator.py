from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import BATCHES
from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class BatchTurnout:
    batch: str
    total_students: int
    present: int
    percentage: int

    @property
    def absent(self) -> int:
        return self.total_students - self.present


@dataclass(frozen=True)
class DashboardStats:
    batches: list[BatchTurnout]
    total_students: int
    total_present: int
    percentage: int


@dataclass(frozen=True)
class StudentSummary:
    present: int
    absent: int
    percentage: int
    details: list[AttendanceRecord]


def turnout_percentage(present: int, total: int) -> int:
    """round(present / total * 100), halves rounded up; 0 for an empty roster."""
    if total <= 0:
        return 0
    return int(math.floor(present / total * 100 + 0.5))


def batch_turnout(students: Iterable[Student], present_ids: Iterable[str], batch: str) -> BatchTurnout:
    batch_ids = {s.student_id for s in students if s.batch == batch}
    present = len(batch_ids & set(present_ids))
    return BatchTurnout(
        batch=batch,
        total_students=len(batch_ids),
        present=present,
        percentage=turnout_percentage(present, len(batch_ids)),
    )


def dashboard_stats(
    students: Sequence[Student],
    records: Iterable[AttendanceRecord],
    batches: Sequence[str] = BATCHES,
) -> DashboardStats:
    """Per-batch and global presence for one date.

    Global figures are the sums of the per-batch figures.
    """
    present_ids = {r.student_id for r in records if r.status == AttendanceStatus.PRESENT}
    per_batch = [batch_turnout(students, present_ids, b) for b in batches]

    total = sum(b.total_students for b in per_batch)
    present = sum(b.present for b in per_batch)
    return DashboardStats(
        batches=per_batch,
        total_students=total,
        total_present=present,
        percentage=turnout_percentage(present, total),
    )


def student_summary(
    records: Iterable[AttendanceRecord],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> StudentSummary:
    """Present/absent totals of one student's records inside [start, end]."""
    in_range = [
        r
        for r in records
        if (start is None or r.attendance_date >= start) and (end is None or r.attendance_date <= end)
    ]
    in_range.sort(key=lambda r: r.attendance_date, reverse=True)

    present = sum(1 for r in in_range if r.status == AttendanceStatus.PRESENT)
    absent = len(in_range) - present
    return StudentSummary(
        present=present,
        absent=absent,
        percentage=turnout_percentage(present, present + absent),
        details=in_range,
    )
