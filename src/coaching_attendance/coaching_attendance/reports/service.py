from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..analytics.aggregator import DashboardStats, StudentSummary, dashboard_stats, student_summary
from ..analytics.merger import count_by_status, merge_attendance
from ..analytics.risk import DEFAULT_POLICY, RiskPolicy, StudentRisk, assess_students, group_by_batch
from ..attendance.model import MergedAttendanceRow
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_display_date, today_local
from ..common.validators import require_batch
from ..core.constants import BATCHES
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class DailyReport:
    batch: str
    attendance_date: date
    rows: list[MergedAttendanceRow]
    present: int
    absent: int


@dataclass(frozen=True)
class StudentReport:
    student: Student
    start: date
    end: date
    summary: StudentSummary


class ReportService:
    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        *,
        policy: Optional[RiskPolicy] = None,
        batches: tuple[str, ...] = BATCHES,
    ):
        self._students = students
        self._attendance = attendance
        self._policy = policy or DEFAULT_POLICY
        self._batches = batches

    def dashboard(self, day: date) -> DashboardStats:
        return dashboard_stats(self._students.list_all(), self._attendance.get_present_for_date(day), self._batches)

    def daily_batch_report(self, batch: str, day: date) -> DailyReport:
        batch = require_batch(batch)
        roster = self._students.list_by_batch(batch)
        if not roster:
            raise NotFoundError(f"No students found in {batch}")

        records = self._attendance.get_for_students_and_date([s.student_id for s in roster], day)
        rows = merge_attendance(roster, records)
        counts = count_by_status(rows)
        return DailyReport(
            batch=batch,
            attendance_date=day,
            rows=rows,
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
        )

    def student_report(self, student_id: str, *, start: date, end: date) -> StudentReport:
        if start > end:
            raise ValidationError("Start date must not be after end date")
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")

        records = self._attendance.get_for_student(student_id, start_date=start, end_date=end)
        return StudentReport(student=student, start=start, end=end, summary=student_summary(records, start=start, end=end))

    def risk_report(self, *, batch: Optional[str] = None) -> dict[str, list[StudentRisk]]:
        """Students with any absence risk, grouped by batch."""
        if batch:
            batch = require_batch(batch)
        stats = self._attendance.get_absentee_stats(history_limit=self._policy.history_window, batch=batch)
        risks = assess_students(stats, self._policy)
        grouped = group_by_batch(risks, self._batches)
        if batch:
            return {batch: grouped.get(batch, [])}
        return grouped

    def daily_report_csv(self, report: DailyReport) -> str:
        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(["Roll No", "Student Name", "Status"])
        for r in report.rows:
            writer.writerow([r.display_roll, r.student.display_name, r.status.value])
        writer.writerow([])
        writer.writerow(["Total Present", report.present])
        writer.writerow(["Total Absent", report.absent])
        return out.getvalue()

    def risk_report_csv(self, batch: str, risks: list[StudentRisk]) -> str:
        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow([f"Batch: {batch}", f"Date: {format_display_date(today_local())}"])
        writer.writerow(["Roll No", "Name", "Risk Issue", "Recent Pattern", "Total"])
        for r in risks:
            writer.writerow(
                [
                    r.student.roll_number or "-",
                    r.student.display_name,
                    r.issue_label,
                    r.recent_pattern,
                    r.stats.total_absent,
                ]
            )
        return out.getvalue()
