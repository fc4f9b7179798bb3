from __future__ import annotations

from datetime import date

from student_attendance.attendance.model import AttendanceRow
from student_attendance.core.enums import AttendanceStatus
from student_attendance.reports import aggregation as agg
from student_attendance.subjects.model import Subject

MARCH_START = date(2026, 3, 1)
MARCH_END = date(2026, 3, 31)


def test_daily_trend_keeps_only_days_with_records(make_row):
    day = date(2026, 3, 10)
    rows = [make_row(1, "present", day=day), make_row(2, "present", day=day), make_row(3, "absent", day=day)]

    trends = agg.daily_trends(rows, MARCH_START, MARCH_END)

    assert trends == [agg.DailyTrendPoint(date=day, present=2, absent=1, late=0, rate=67)]


def test_daily_trend_counts_all_subjects_and_sorts_by_date(make_row):
    rows = [
        make_row(1, "late", subject_id=2, day=date(2026, 3, 20)),
        make_row(1, "absent", subject_id=1, day=date(2026, 3, 5)),
        make_row(2, "present", subject_id=2, day=date(2026, 3, 5)),
    ]

    trends = agg.daily_trends(rows, MARCH_START, MARCH_END)

    assert [p.date for p in trends] == [date(2026, 3, 5), date(2026, 3, 20)]
    assert trends[0].rate == 50
    assert trends[1].rate == 100


def test_daily_trend_ignores_rows_outside_the_range(make_row):
    rows = [make_row(1, "present", day=date(2026, 4, 1))]

    assert agg.daily_trends(rows, MARCH_START, MARCH_END) == []


def test_subject_breakdown_counts_present_only():
    math = Subject(subject_id=1, name="Math", code="M")
    rows = _math_rows(present=7, late=0, absent=3)
    assert agg.subject_breakdown(rows, [math])[0].rate == 70

    rows = _math_rows(present=7, late=2, absent=1)
    breakdown = agg.subject_breakdown(rows, [math])
    assert breakdown[0].rate == 70
    assert breakdown[0].present == 7
    assert breakdown[0].total == 10
    assert agg.overall_stats(rows).avg_rate == 90


def test_breakdown_and_attendance_rates_differ_when_late_present(make_row):
    rows = [make_row(1, "present"), make_row(2, "late")]
    subject = Subject(subject_id=1, name="Mathematics", code="MATH101")

    assert agg.subject_breakdown(rows, [subject])[0].rate == 50
    assert agg.overall_stats(rows).avg_rate == 100
    assert agg.history_stats(rows).percentage == 100


def test_subject_breakdown_skips_subjects_without_records(make_row, subjects):
    rows = [make_row(1, "present", subject_id=2)]

    breakdown = agg.subject_breakdown(rows, subjects)

    assert [b.code for b in breakdown] == ["PHY101"]


def test_student_at_exactly_75_is_not_flagged(make_row, students):
    rows = [make_row(1, "present"), make_row(1, "present"), make_row(1, "present"), make_row(1, "absent")]

    assert agg.history_stats(rows).percentage == 75
    assert agg.low_attendance(rows, students) == []


def test_low_attendance_sorted_worst_first_with_stable_ties(make_row, students):
    rows = [
        # Alice 50%
        make_row(1, "present"),
        make_row(1, "absent"),
        # Bob 0%
        make_row(2, "absent"),
        # Chen 50%
        make_row(3, "late"),
        make_row(3, "absent"),
    ]

    flagged = agg.low_attendance(rows, students)

    assert [e.name for e in flagged] == ["Bob", "Alice", "Chen"]
    assert [e.rate for e in flagged] == [0, 50, 50]
    chen = flagged[2]
    assert (chen.present, chen.total) == (0, 2)


def test_low_attendance_never_includes_students_without_records(make_row, students):
    rows = [make_row(1, "absent")]

    flagged = agg.low_attendance(rows, students)

    assert [e.student_id for e in flagged] == [1]


def test_low_attendance_partitions_students_by_threshold(make_row, students):
    rows = [make_row(1, "late"), make_row(2, "absent"), make_row(2, "present"), make_row(3, "present")]

    flagged = agg.low_attendance(rows, students)
    flagged_ids = {e.student_id for e in flagged}

    for student in students:
        stats = agg.history_stats([r for r in rows if r.student_id == student.student_id])
        if stats.total == 0:
            continue
        assert (student.student_id in flagged_ids) == (stats.percentage < 75)
    assert all(0 <= e.rate <= 100 for e in flagged)


def test_empty_input_yields_zero_rates():
    assert agg.overall_stats([]) == agg.OverallStats(total_classes=0, avg_rate=0)
    assert agg.history_stats([]) == agg.HistoryStats(total=0, present=0, absent=0, late=0, percentage=0)
    assert agg.daily_trends([], MARCH_START, MARCH_END) == []
    assert agg.subject_breakdown([], [Subject(subject_id=1, name="Math", code="M")]) == []


def test_history_stats_filters_by_subject(make_row):
    rows = [make_row(1, "present", subject_id=1), make_row(1, "absent", subject_id=2), make_row(1, "late", subject_id=2)]

    stats = agg.history_stats(rows, subject_id=2)

    assert stats == agg.HistoryStats(total=2, present=0, absent=1, late=1, percentage=50)


def test_rounded_percent_rounds_half_up():
    assert agg.rounded_percent(1, 8) == 13
    assert agg.rounded_percent(2, 3) == 67
    assert agg.rounded_percent(1, 3) == 33
    assert agg.rounded_percent(5, 0) == 0


def test_daily_snapshot_uses_every_student_subject_slot(make_row):
    day = date(2026, 3, 10)
    rows = [make_row(1, "present", day=day), make_row(2, "late", day=day), make_row(3, "present", day=date(2026, 3, 9))]

    snapshot = agg.daily_snapshot(rows, day=day, total_students=3, total_subjects=2)

    assert snapshot.present_count == 1
    assert snapshot.rate == 16.7


def test_daily_snapshot_without_students_is_zero():
    snapshot = agg.daily_snapshot([], day=date(2026, 3, 10), total_students=0, total_subjects=0)

    assert snapshot.rate == 0.0


def test_recent_months_crosses_year_boundary():
    options = agg.recent_months(date(2026, 2, 14), count=3)

    assert [o.value for o in options] == ["2026-02", "2026-01", "2025-12"]


def _math_rows(*, present: int, late: int, absent: int):
    rows = []
    statuses = ["present"] * present + ["late"] * late + ["absent"] * absent
    for i, status in enumerate(statuses, start=1):
        rows.append(
            AttendanceRow(
                attendance_id=i,
                student_id=i,
                subject_id=1,
                attendance_date=date(2026, 3, 2),
                status=AttendanceStatus(status),
            )
        )
    return rows
