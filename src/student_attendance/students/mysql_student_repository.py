from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student, StudentRegistration
from .repository import StudentRepository

_ORDER_COLUMNS = {
    "roll_number": "roll_number ASC",
    "name": "name ASC",
}


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        roll_number=r["roll_number"],
        name=r["name"],
        email=r["email"],
        phone=r.get("phone"),
        department=r["department"],
        year=int(r["year"]),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, roll_number, name, email, phone, department, year, created_at
                FROM students
                WHERE student_id=%s
                """,
                (int(student_id),),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_all(self, *, order_by: str = "roll_number") -> Sequence[Student]:
        order = _ORDER_COLUMNS.get(order_by, _ORDER_COLUMNS["roll_number"])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, roll_number, name, email, phone, department, year, created_at
                FROM students
                ORDER BY {order}, student_id ASC
                """
            )
            return [_to_student(r) for r in fetchall(cur)]

    def create(self, registration: StudentRegistration) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(roll_number, name, email, phone, department, year)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    registration.roll_number,
                    registration.name,
                    registration.email,
                    registration.phone,
                    registration.department,
                    int(registration.year),
                ),
            )
            return int(cur.lastrowid)
