"""Attendance aggregation.

Pure functions that turn attendance rows into the figures shown on the
analytics, history and dashboard views. Every function accepts an empty input
and never mutates what it is given.

Two rate definitions coexist on purpose:

* ``attendance_rate`` counts present + late (trends, overall, history, alerts)
* ``presence_rate`` counts present only (subject breakdown)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRow
from ..common.datetime_utils import iter_days, shift_months
from ..core.constants import LOW_ATTENDANCE_THRESHOLD, RECENT_MONTHS
from ..core.enums import AttendanceStatus
from ..students.model import Student
from ..subjects.model import Subject

PRESENT = AttendanceStatus.PRESENT
ABSENT = AttendanceStatus.ABSENT
LATE = AttendanceStatus.LATE


@dataclass(frozen=True)
class DailyTrendPoint:
    date: date
    present: int
    absent: int
    late: int
    rate: int


@dataclass(frozen=True)
class SubjectBreakdown:
    subject_id: int
    code: str
    name: str
    present: int
    total: int
    rate: int


@dataclass(frozen=True)
class LowAttendanceEntry:
    student_id: int
    name: str
    roll_number: str
    department: str
    present: int
    total: int
    rate: int


@dataclass(frozen=True)
class OverallStats:
    total_classes: int
    avg_rate: int


@dataclass(frozen=True)
class HistoryStats:
    total: int
    present: int
    absent: int
    late: int
    percentage: int


@dataclass(frozen=True)
class DailySnapshot:
    date: date
    total_students: int
    total_subjects: int
    present_count: int
    rate: float


@dataclass(frozen=True)
class MonthOption:
    value: str
    label: str


def rounded_percent(part: int, whole: int) -> int:
    """100 * part / whole rounded half-up; 0 when ``whole`` is 0."""

    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def attendance_rate(present: int, late: int, total: int) -> int:
    return rounded_percent(present + late, total)


def presence_rate(present: int, total: int) -> int:
    return rounded_percent(present, total)


def _status_counts(rows: Iterable[AttendanceRow]) -> Counter:
    return Counter(r.status for r in rows)


def daily_trends(rows: Sequence[AttendanceRow], start: date, end: date) -> list[DailyTrendPoint]:
    """One point per day in [start, end] that has at least one record."""

    per_day: dict[date, Counter] = {}
    for r in rows:
        per_day.setdefault(r.attendance_date, Counter())[r.status] += 1

    points: list[DailyTrendPoint] = []
    for day in iter_days(start, end):
        counts = per_day.get(day)
        if not counts:
            continue
        present, absent, late = counts[PRESENT], counts[ABSENT], counts[LATE]
        total = present + absent + late
        if total == 0:
            continue
        points.append(
            DailyTrendPoint(
                date=day,
                present=present,
                absent=absent,
                late=late,
                rate=attendance_rate(present, late, total),
            )
        )
    return points


def subject_breakdown(rows: Sequence[AttendanceRow], subjects: Sequence[Subject]) -> list[SubjectBreakdown]:
    out: list[SubjectBreakdown] = []
    for subject in subjects:
        subject_rows = [r for r in rows if r.subject_id == subject.subject_id]
        total = len(subject_rows)
        if total == 0:
            continue
        present = sum(1 for r in subject_rows if r.status == PRESENT)
        out.append(
            SubjectBreakdown(
                subject_id=subject.subject_id,
                code=subject.code,
                name=subject.name,
                present=present,
                total=total,
                rate=presence_rate(present, total),
            )
        )
    return out


def low_attendance(
    rows: Sequence[AttendanceRow],
    students: Sequence[Student],
    *,
    threshold: int = LOW_ATTENDANCE_THRESHOLD,
) -> list[LowAttendanceEntry]:
    """Students with records whose attendance rate is below ``threshold``, worst first."""

    flagged: list[LowAttendanceEntry] = []
    for student in students:
        counts = _status_counts(r for r in rows if r.student_id == student.student_id)
        total = sum(counts.values())
        if total == 0:
            continue
        rate = attendance_rate(counts[PRESENT], counts[LATE], total)
        if rate >= threshold:
            continue
        flagged.append(
            LowAttendanceEntry(
                student_id=student.student_id,
                name=student.name,
                roll_number=student.roll_number,
                department=student.department,
                present=counts[PRESENT],
                total=total,
                rate=rate,
            )
        )
    # sorted() is stable: equal rates keep student order
    return sorted(flagged, key=lambda e: e.rate)


def overall_stats(rows: Sequence[AttendanceRow]) -> OverallStats:
    counts = _status_counts(rows)
    total = len(rows)
    return OverallStats(total_classes=total, avg_rate=attendance_rate(counts[PRESENT], counts[LATE], total))


def history_stats(rows: Sequence[AttendanceRow], subject_id: Optional[int] = None) -> HistoryStats:
    if subject_id is not None:
        rows = [r for r in rows if r.subject_id == subject_id]
    counts = _status_counts(rows)
    total = len(rows)
    return HistoryStats(
        total=total,
        present=counts[PRESENT],
        absent=counts[ABSENT],
        late=counts[LATE],
        percentage=attendance_rate(counts[PRESENT], counts[LATE], total),
    )


def daily_snapshot(
    rows: Sequence[AttendanceRow],
    *,
    day: date,
    total_students: int,
    total_subjects: int,
) -> DailySnapshot:
    """Dashboard figure: present marks on ``day`` over every (student, subject) slot.

    With no subjects the denominator falls back to the student count.
    """

    present = sum(1 for r in rows if r.attendance_date == day and r.status == PRESENT)
    slots = total_students * max(total_subjects, 1)
    rate = 0.0
    if total_students > 0:
        rate = ((2000 * present + slots) // (2 * slots)) / 10
    return DailySnapshot(
        date=day,
        total_students=total_students,
        total_subjects=total_subjects,
        present_count=present,
        rate=rate,
    )


def recent_months(today: date, count: int = RECENT_MONTHS) -> list[MonthOption]:
    first = today.replace(day=1)
    options: list[MonthOption] = []
    for i in range(count):
        month = shift_months(first, -i)
        options.append(MonthOption(value=month.strftime("%Y-%m"), label=month.strftime("%B %Y")))
    return options
