from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model: a record joined with student/subject display fields.

    Joined fields are None when the referenced row is missing.
    """

    attendance_id: int
    student_id: int
    subject_id: int
    attendance_date: date
    status: AttendanceStatus
    marked_by: Optional[int] = None
    created_at: Optional[datetime] = None
    student_name: Optional[str] = None
    roll_number: Optional[str] = None
    department: Optional[str] = None
    subject_name: Optional[str] = None
    subject_code: Optional[str] = None


@dataclass(frozen=True)
class AttendanceFilter:
    """Filter for attendance listings. Hashable so it can key the query cache."""

    subject_id: Optional[int] = None
    on_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    student_id: Optional[int] = None


@dataclass(frozen=True)
class MarkingSheetRow:
    student_id: int
    roll_number: str
    name: str
    department: str
    status: Optional[AttendanceStatus]
