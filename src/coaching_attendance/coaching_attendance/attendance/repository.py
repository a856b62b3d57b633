from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AbsenteeStats, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_students_and_date(self, student_ids: Sequence[str], attendance_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_present_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_student(
        self,
        student_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert_many(self, *, attendance_date: date, statuses: dict[str, AttendanceStatus]) -> int:
        """Insert or update one row per (student, date)."""

        raise NotImplementedError

    def get_absentee_stats(self, *, history_limit: int, batch: Optional[str] = None) -> Sequence[AbsenteeStats]:
        """Lifetime absence totals plus the newest `history_limit` statuses per student."""

        raise NotImplementedError

    def delete_all(self) -> None:
        raise NotImplementedError
