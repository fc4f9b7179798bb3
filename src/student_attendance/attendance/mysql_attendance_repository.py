from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceFilter, AttendanceRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_rows(self, filters: AttendanceFilter) -> Sequence[AttendanceRow]:
        clauses: list[str] = []
        params: list[object] = []

        if filters.subject_id is not None:
            clauses.append("a.subject_id=%s")
            params.append(int(filters.subject_id))
        if filters.student_id is not None:
            clauses.append("a.student_id=%s")
            params.append(int(filters.student_id))
        if filters.on_date is not None:
            clauses.append("a.attendance_date=%s")
            params.append(filters.on_date)
        if filters.start_date is not None:
            clauses.append("a.attendance_date>=%s")
            params.append(filters.start_date)
        if filters.end_date is not None:
            clauses.append("a.attendance_date<=%s")
            params.append(filters.end_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.attendance_id, a.student_id, a.subject_id, a.attendance_date,
                    a.status, a.marked_by, a.created_at,
                    st.name AS student_name, st.roll_number, st.department,
                    sb.name AS subject_name, sb.code AS subject_code
                FROM attendance a
                LEFT JOIN students st ON st.student_id = a.student_id
                LEFT JOIN subjects sb ON sb.subject_id = a.subject_id
                {where}
                ORDER BY a.attendance_date DESC, a.created_at DESC, a.attendance_id DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceRow(
                    attendance_id=int(r["attendance_id"]),
                    student_id=int(r["student_id"]),
                    subject_id=int(r["subject_id"]),
                    attendance_date=r["attendance_date"],
                    status=AttendanceStatus(r["status"]),
                    marked_by=r.get("marked_by"),
                    created_at=r.get("created_at"),
                    student_name=r.get("student_name"),
                    roll_number=r.get("roll_number"),
                    department=r.get("department"),
                    subject_name=r.get("subject_name"),
                    subject_code=r.get("subject_code"),
                )
                for r in rows
            ]

    def replace_for_subject_date(
        self,
        *,
        subject_id: int,
        attendance_date: date,
        entries: Mapping[int, AttendanceStatus],
        marked_by: int,
        created_at: datetime,
    ) -> int:
        # Delete and insert share one transaction: db_cursor commits once at the end.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE subject_id=%s AND attendance_date=%s",
                (int(subject_id), attendance_date),
            )
            rows = [
                (int(student_id), int(subject_id), attendance_date, status.value, int(marked_by), created_at)
                for student_id, status in entries.items()
            ]
            cur.executemany(
                """
                INSERT INTO attendance(student_id, subject_id, attendance_date, status, marked_by, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                rows,
            )
            return len(rows)
