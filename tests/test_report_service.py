from __future__ import annotations

from datetime import date

import pytest

from conftest import InMemoryAttendance, InMemoryStudents
from src.coaching_attendance.coaching_attendance.analytics.risk import build_policy
from src.coaching_attendance.coaching_attendance.attendance.model import AbsenteeStats, AttendanceRecord
from src.coaching_attendance.coaching_attendance.core.enums import AttendanceStatus, RiskType
from src.coaching_attendance.coaching_attendance.core.exceptions import NotFoundError, ValidationError
from src.coaching_attendance.coaching_attendance.reports.service import ReportService

A = AttendanceStatus.ABSENT
P = AttendanceStatus.PRESENT
DAY = date(2026, 3, 2)


def _service(roster, records=(), policy=None):
    attendance = InMemoryAttendance(records)
    return ReportService(InMemoryStudents(roster), attendance, policy=policy), attendance


def test_dashboard_counts_present_per_batch(roster):
    svc, _ = _service(
        roster,
        [
            AttendanceRecord("f1", DAY, P),
            AttendanceRecord("m1", DAY, A),
            AttendanceRecord("n1", DAY, P),
            AttendanceRecord("n2", date(2026, 3, 1), P),
        ],
    )

    stats = svc.dashboard(DAY)

    by_batch = {b.batch: b for b in stats.batches}
    assert (by_batch["S1"].present, by_batch["S1"].total_students) == (1, 4)
    assert (by_batch["N1"].present, by_batch["N1"].total_students) == (1, 2)
    assert (stats.total_present, stats.total_students, stats.percentage) == (2, 6, 33)


def test_daily_batch_report_and_csv(roster):
    svc, _ = _service(roster, [AttendanceRecord("m2", DAY, P)])

    report = svc.daily_batch_report("S1", DAY)
    lines = svc.daily_report_csv(report).splitlines()

    assert (report.present, report.absent) == (1, 3)
    assert lines[0] == "Roll No,Student Name,Status"
    assert lines[1:5] == ["01,ANJALI P,Absent", "02,DIYA S,Absent", "7,ARJUN M,Present", "04,RAHUL K,Absent"]
    assert lines[-2:] == ["Total Present,1", "Total Absent,3"]


def test_daily_report_for_empty_batch_is_not_found(roster):
    svc, _ = _service(roster)

    with pytest.raises(NotFoundError):
        svc.daily_batch_report("E1", DAY)


def test_student_report_range(roster):
    svc, _ = _service(
        roster,
        [
            AttendanceRecord("f1", date(2026, 2, 28), P),
            AttendanceRecord("f1", date(2026, 3, 1), A),
            AttendanceRecord("f1", DAY, P),
        ],
    )

    report = svc.student_report("f1", start=date(2026, 3, 1), end=date(2026, 3, 31))

    assert report.student.name == "ANJALI P"
    assert (report.summary.present, report.summary.absent, report.summary.percentage) == (1, 1, 50)
    assert [r.attendance_date for r in report.summary.details] == [DAY, date(2026, 3, 1)]


def test_student_report_validates_input(roster):
    svc, _ = _service(roster)

    with pytest.raises(ValidationError):
        svc.student_report("f1", start=date(2026, 3, 2), end=date(2026, 3, 1))
    with pytest.raises(NotFoundError):
        svc.student_report("ghost", start=DAY, end=DAY)


def _stats(student, history, total):
    return AbsenteeStats(student=student, total_absent=total, recent_statuses=tuple(history))


def test_risk_report_groups_students_at_risk(roster):
    svc, attendance = _service(roster)
    by_id = {s.student_id: s for s in roster}
    attendance.absentee_stats = [
        _stats(by_id["m1"], [A, A, A, P], 5),
        _stats(by_id["m2"], [P, A, A, A, P, P], 4),
        _stats(by_id["f1"], [P, P, P], 0),
        _stats(by_id["n2"], [P, A, P, A, A, P], 3),
    ]

    grouped = svc.risk_report()

    assert attendance.last_stats_args == {"history_limit": 10, "batch": None}
    assert [r.student.student_id for r in grouped["S1"]] == ["m1", "m2"]
    # a streak of 3 also puts 3 absences inside the week window
    assert {r.student.student_id: r.assessment.risk_type for r in grouped["S1"]} == {
        "m1": RiskType.CRITICAL,
        "m2": RiskType.FREQUENT,
    }
    assert grouped["N1"][0].assessment.risk_type == RiskType.FREQUENT
    assert grouped["S2"] == []


def test_risk_report_streak_without_frequent_week(roster):
    svc, attendance = _service(roster, policy=build_policy("combined", frequent_threshold=3))
    by_id = {s.student_id: s for s in roster}
    attendance.absentee_stats = [_stats(by_id["f2"], [A, A, A, P, P, P], 3)]

    risk = svc.risk_report(batch="S1")["S1"][0]

    assert risk.assessment.risk_type == RiskType.CONSECUTIVE
    assert risk.issue_label == "Streak: 3 Days"


def test_risk_report_for_one_batch_and_csv(roster):
    svc, attendance = _service(roster, policy=build_policy("streak_only"))
    by_id = {s.student_id: s for s in roster}
    attendance.absentee_stats = [
        _stats(by_id["m2"], [A, A, A, A], 12),
        _stats(by_id["n2"], [P, A, P, A, A, P], 3),
    ]

    grouped = svc.risk_report(batch="s1")
    lines = svc.risk_report_csv("S1", grouped["S1"]).splitlines()

    assert list(grouped) == ["S1"]
    assert attendance.last_stats_args["batch"] == "S1"
    assert lines[1] == "Roll No,Name,Risk Issue,Recent Pattern,Total"
    assert lines[2] == "7,ARJUN M,Streak: 4 Days,A-A-A-A,12"
