from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceFilter, AttendanceRow


class AttendanceRepository(Protocol):
    def list_rows(self, filters: AttendanceFilter) -> Sequence[AttendanceRow]:
        """Attendance joined with student/subject fields, newest first."""

        raise NotImplementedError

    def replace_for_subject_date(
        self,
        *,
        subject_id: int,
        attendance_date: date,
        entries: Mapping[int, AttendanceStatus],
        marked_by: int,
        created_at: datetime,
    ) -> int:
        """Delete every row for (subject, date) then insert ``entries``.

        Returns the number of inserted rows.
        """

        raise NotImplementedError
