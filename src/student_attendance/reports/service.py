from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceFilter, AttendanceRow
from ..attendance.service import AttendanceService
from ..common.datetime_utils import month_bounds
from ..core.constants import LOW_ATTENDANCE_THRESHOLD
from ..core.exceptions import ValidationError
from ..students.model import Student
from ..students.service import StudentService
from ..subjects.model import Subject
from ..subjects.service import SubjectService
from . import aggregation as agg


@dataclass(frozen=True)
class MonthlyAnalytics:
    month: str
    start: date
    end: date
    stats: agg.OverallStats
    trends: list[agg.DailyTrendPoint]
    breakdown: list[agg.SubjectBreakdown]
    low_attendance: list[agg.LowAttendanceEntry]
    low_attendance_count: int
    threshold: int
    month_options: list[agg.MonthOption]


@dataclass(frozen=True)
class SubjectHistory:
    subject_id: int
    code: str
    name: str
    stats: agg.HistoryStats
    records: list[AttendanceRow]


@dataclass(frozen=True)
class StudentHistory:
    student: Student
    overall: agg.HistoryStats
    records: list[AttendanceRow]
    by_subject: list[SubjectHistory]


@dataclass(frozen=True)
class DashboardSummary:
    snapshot: agg.DailySnapshot
    subjects: Sequence[Subject]


class ReportService:
    """Read side: fetch rows through the query cache and aggregate them."""

    def __init__(
        self,
        attendance: AttendanceService,
        students: StudentService,
        subjects: SubjectService,
        *,
        low_attendance_threshold: int = LOW_ATTENDANCE_THRESHOLD,
    ):
        self._attendance = attendance
        self._students = students
        self._subjects = subjects
        self._threshold = int(low_attendance_threshold)

    def monthly_analytics(self, month: date, *, today: Optional[date] = None) -> MonthlyAnalytics:
        start, end = month_bounds(month)
        rows = self._attendance.list_rows(AttendanceFilter(start_date=start, end_date=end))
        subjects = self._subjects.list_subjects()
        students = self._students.list_students()

        flagged = agg.low_attendance(rows, students, threshold=self._threshold)
        return MonthlyAnalytics(
            month=start.strftime("%Y-%m"),
            start=start,
            end=end,
            stats=agg.overall_stats(rows),
            trends=agg.daily_trends(rows, start, end),
            breakdown=agg.subject_breakdown(rows, subjects),
            low_attendance=flagged,
            low_attendance_count=len(flagged),
            threshold=self._threshold,
            month_options=agg.recent_months(today or date.today()),
        )

    def student_history(self, student_id: int) -> StudentHistory:
        student = self._students.get_student(student_id)
        if not student:
            raise ValidationError("Student not found")

        rows = list(self._attendance.list_rows(AttendanceFilter(student_id=student.student_id)))
        by_subject = [
            SubjectHistory(
                subject_id=s.subject_id,
                code=s.code,
                name=s.name,
                stats=agg.history_stats(rows, s.subject_id),
                records=[r for r in rows if r.subject_id == s.subject_id],
            )
            for s in self._subjects.list_subjects()
        ]
        return StudentHistory(
            student=student,
            overall=agg.history_stats(rows),
            records=rows,
            by_subject=by_subject,
        )

    def attendance_records(self, *, subject_id: Optional[int] = None) -> list[AttendanceRow]:
        return list(self._attendance.list_rows(AttendanceFilter(subject_id=subject_id)))

    def dashboard(self, today: date) -> DashboardSummary:
        rows = self._attendance.list_rows(AttendanceFilter(on_date=today))
        subjects = self._subjects.list_subjects()
        snapshot = agg.daily_snapshot(
            rows,
            day=today,
            total_students=len(self._students.list_students()),
            total_subjects=len(subjects),
        )
        return DashboardSummary(snapshot=snapshot, subjects=subjects)
