from datetime import date

from src.coaching_attendance.coaching_attendance.analytics.merger import (
    absentee_names,
    count_by_status,
    filter_rows,
    merge_attendance,
    with_status,
)
from src.coaching_attendance.coaching_attendance.attendance.model import AttendanceRecord
from src.coaching_attendance.coaching_attendance.core.enums import AttendanceStatus

DAY = date(2026, 3, 2)


def _rec(sid, status, attendance_id=None):
    return AttendanceRecord(student_id=sid, attendance_date=DAY, status=status, attendance_id=attendance_id)


def test_every_student_gets_one_row_and_unmarked_is_absent(roster):
    s1 = [s for s in roster if s.batch == "S1"]
    records = [_rec("f1", AttendanceStatus.PRESENT, 10), _rec("m1", AttendanceStatus.ABSENT, 11)]

    rows = merge_attendance(s1, records)

    assert len(rows) == len(s1)
    assert [r.student.student_id for r in rows] == ["f1", "f2", "m2", "m1"]
    by_id = {r.student.student_id: r for r in rows}
    assert by_id["f1"].status == AttendanceStatus.PRESENT
    assert by_id["f1"].attendance_id == 10
    assert by_id["f2"].status == AttendanceStatus.ABSENT
    assert by_id["f2"].attendance_id is None
    assert by_id["m2"].status == AttendanceStatus.ABSENT


def test_records_outside_roster_are_dropped(roster):
    s1 = [s for s in roster if s.batch == "S1"]

    rows = merge_attendance(s1, [_rec("ghost", AttendanceStatus.PRESENT)])

    assert len(rows) == 4
    assert all(r.status == AttendanceStatus.ABSENT for r in rows)


def test_display_roll_uses_full_roster_position_when_filtered(roster):
    s1 = [s for s in roster if s.batch == "S1"]
    rows = merge_attendance(s1, [])

    found = filter_rows(rows, "rahul")

    assert len(found) == 1
    # RAHUL K is 4th in roster order (two girls, then ARJUN, then RAHUL).
    assert found[0].display_roll == "04"
    # ARJUN M keeps his stored roll number.
    assert [r.display_roll for r in rows] == ["01", "02", "7", "04"]


def test_filter_matches_roll_number_and_empty_query_keeps_all(roster):
    rows = merge_attendance([s for s in roster if s.batch == "S1"], [])

    assert [r.student.student_id for r in filter_rows(rows, "7")] == ["m2"]
    assert len(filter_rows(rows, "  ")) == 4


def test_counts_and_absentee_names(roster):
    s1 = [s for s in roster if s.batch == "S1"]
    rows = merge_attendance(s1, [_rec("f1", AttendanceStatus.PRESENT)])

    counts = count_by_status(rows)

    assert counts[AttendanceStatus.PRESENT] == 1
    assert counts[AttendanceStatus.ABSENT] == 3
    assert absentee_names(rows) == ["DIYA S", "ARJUN M", "RAHUL K"]
    assert count_by_status(with_status(rows, AttendanceStatus.PRESENT))[AttendanceStatus.PRESENT] == 4


def test_empty_roster_gives_no_rows():
    assert merge_attendance([], [_rec("x", AttendanceStatus.PRESENT)]) == []
