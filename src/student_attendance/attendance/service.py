from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Mapping, Optional, Sequence

from ..common.cache import QueryCache
from ..common.datetime_utils import now_local
from ..core import constants as c
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.service import StudentService
from ..users.service import AuthService
from .model import AttendanceFilter, AttendanceRow, MarkingSheetRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _parse_entries(entries: Optional[Mapping[object, object]]) -> dict[int, AttendanceStatus]:
    if not entries:
        raise ValidationError("Select at least one student to record attendance")

    parsed: dict[int, AttendanceStatus] = {}
    for student_id, status in entries.items():
        try:
            sid = int(student_id)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid student id: {student_id!r}") from None
        try:
            parsed[sid] = AttendanceStatus(str(status).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid attendance status: {status!r}") from None
    return parsed


class AttendanceService:
    """Use case: mark attendance for a (subject, date) and read it back."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentService,
        auth: AuthService,
        *,
        cache: Optional[QueryCache] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._auth = auth
        self._cache = cache or QueryCache()

    def mark_attendance(
        self,
        *,
        actor_id: Optional[int],
        subject_id: Optional[int],
        attendance_date: Optional[date],
        entries: Optional[Mapping[object, object]],
        now: Optional[datetime] = None,
    ) -> int:
        """Replace every record for (subject, date) with ``entries``.

        ``entries`` maps student id to status; students left out end up with
        no record for that day. Returns the number of records written.
        """

        actor = self._auth.resolve_actor(actor_id)

        if not subject_id:
            raise ValidationError("Please select a subject")
        if attendance_date is None:
            raise ValidationError("Please select a date")
        parsed = _parse_entries(entries)

        now = now or now_local()
        written = self._attendance.replace_for_subject_date(
            subject_id=int(subject_id),
            attendance_date=attendance_date,
            entries=parsed,
            marked_by=actor.user_id,
            created_at=now,
        )

        self._cache.invalidate(c.CACHE_ATTENDANCE)
        logger.info(
            "attendance replaced subject_id=%s date=%s records=%d by user_id=%s",
            subject_id,
            attendance_date,
            written,
            actor.user_id,
        )
        return written

    def list_rows(self, filters: AttendanceFilter) -> Sequence[AttendanceRow]:
        return self._cache.get_or_load(
            c.CACHE_ATTENDANCE,
            filters,
            lambda: tuple(self._attendance.list_rows(filters)),
        )

    def marking_sheet(self, *, subject_id: int, attendance_date: date) -> list[MarkingSheetRow]:
        """Every student with the status currently stored for (subject, date)."""

        existing = {
            r.student_id: r.status
            for r in self.list_rows(AttendanceFilter(subject_id=int(subject_id), on_date=attendance_date))
        }
        students = self._students.list_students(order_by="roll_number")
        return [
            MarkingSheetRow(
                student_id=s.student_id,
                roll_number=s.roll_number,
                name=s.name,
                department=s.department,
                status=existing.get(s.student_id),
            )
            for s in students
        ]
