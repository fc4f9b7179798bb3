from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from student_attendance.attendance.model import AttendanceFilter, AttendanceRow
from student_attendance.attendance.service import AttendanceService
from student_attendance.common.cache import QueryCache
from student_attendance.core.enums import AttendanceStatus, Role
from student_attendance.core.exceptions import ConflictError
from student_attendance.reports.service import ReportService
from student_attendance.students.model import Student, StudentRegistration
from student_attendance.students.service import StudentService
from student_attendance.subjects.model import Subject
from student_attendance.subjects.service import SubjectService
from student_attendance.users.model import User
from student_attendance.users.service import AuthService


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self._by_id = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.username == username:
                return u
        return None


class InMemoryStudents:
    def __init__(self, students: Optional[list[Student]] = None):
        self._students: dict[int, Student] = {s.student_id: s for s in students or []}
        self._next_id = max(self._students, default=0) + 1
        self.list_calls = 0
        self.create_calls = 0

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._students.get(student_id)

    def list_all(self, *, order_by: str = "roll_number"):
        self.list_calls += 1
        key = (lambda s: s.name) if order_by == "name" else (lambda s: s.roll_number)
        return sorted(self._students.values(), key=key)

    def create(self, registration: StudentRegistration) -> int:
        self.create_calls += 1
        for s in self._students.values():
            if s.roll_number == registration.roll_number or s.email == registration.email:
                raise ConflictError("Duplicate entry for key 'uq_students_roll_number'")
        student_id = self._next_id
        self._next_id += 1
        self._students[student_id] = Student(
            student_id=student_id,
            roll_number=registration.roll_number,
            name=registration.name,
            email=registration.email,
            phone=registration.phone,
            department=registration.department,
            year=registration.year,
        )
        return student_id

    def all(self) -> list[Student]:
        return list(self._students.values())


class InMemorySubjects:
    def __init__(self, subjects: list[Subject]):
        self._subjects = list(subjects)

    def list_all(self):
        return sorted(self._subjects, key=lambda s: s.name)


class InMemoryAttendance:
    def __init__(self, rows: Optional[list[AttendanceRow]] = None):
        self.rows: list[AttendanceRow] = list(rows or [])
        self._next_id = len(self.rows) + 1
        self.list_calls = 0
        self.deletes = 0
        self.inserts = 0

    def list_rows(self, filters: AttendanceFilter):
        self.list_calls += 1
        out = []
        for r in self.rows:
            if filters.subject_id is not None and r.subject_id != filters.subject_id:
                continue
            if filters.student_id is not None and r.student_id != filters.student_id:
                continue
            if filters.on_date is not None and r.attendance_date != filters.on_date:
                continue
            if filters.start_date is not None and r.attendance_date < filters.start_date:
                continue
            if filters.end_date is not None and r.attendance_date > filters.end_date:
                continue
            out.append(r)
        out.sort(key=lambda r: (r.attendance_date, r.created_at or datetime.min), reverse=True)
        return out

    def replace_for_subject_date(self, *, subject_id, attendance_date, entries, marked_by, created_at):
        self.deletes += 1
        self.rows = [
            r for r in self.rows if not (r.subject_id == subject_id and r.attendance_date == attendance_date)
        ]
        for student_id, status in entries.items():
            self.inserts += 1
            self.rows.append(
                AttendanceRow(
                    attendance_id=self._next_id,
                    student_id=student_id,
                    subject_id=subject_id,
                    attendance_date=attendance_date,
                    status=status,
                    marked_by=marked_by,
                    created_at=created_at,
                )
            )
            self._next_id += 1
        return len(entries)


def _row(
    student_id: int,
    status: str,
    *,
    subject_id: int = 1,
    day: date = date(2026, 3, 10),
    attendance_id: int = 0,
) -> AttendanceRow:
    return AttendanceRow(
        attendance_id=attendance_id,
        student_id=student_id,
        subject_id=subject_id,
        attendance_date=day,
        status=AttendanceStatus(status),
        marked_by=1,
        created_at=datetime(day.year, day.month, day.day, 9, 0),
    )


def _student(student_id: int, name: str, roll_number: str, *, department: str = "Computer Science") -> Student:
    return Student(
        student_id=student_id,
        roll_number=roll_number,
        name=name,
        email=f"{roll_number}@school.test",
        phone=None,
        department=department,
        year=2,
    )


@pytest.fixture
def staff_user() -> User:
    return User(
        user_id=7,
        full_name="Staff Demo",
        username="staff",
        password_hash=generate_password_hash("staff123"),
        role=Role.STAFF,
    )


@pytest.fixture
def subjects() -> list[Subject]:
    return [
        Subject(subject_id=1, name="Mathematics", code="MATH101"),
        Subject(subject_id=2, name="Physics", code="PHY101"),
    ]


@pytest.fixture
def students() -> list[Student]:
    return [
        _student(1, "Alice", "2024001"),
        _student(2, "Bob", "2024002"),
        _student(3, "Chen", "2024003"),
    ]


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def students_repo(students) -> InMemoryStudents:
    return InMemoryStudents(students)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def users_repo(staff_user) -> InMemoryUsers:
    return InMemoryUsers([staff_user])


@pytest.fixture
def student_service(students_repo, cache) -> StudentService:
    return StudentService(students_repo, cache=cache)


@pytest.fixture
def subject_service(subjects, cache) -> SubjectService:
    return SubjectService(InMemorySubjects(subjects), cache=cache)


@pytest.fixture
def auth_service(users_repo) -> AuthService:
    return AuthService(users_repo)


@pytest.fixture
def attendance_service(attendance_repo, student_service, auth_service, cache) -> AttendanceService:
    return AttendanceService(attendance_repo, student_service, auth_service, cache=cache)


@pytest.fixture
def report_service(attendance_service, student_service, subject_service) -> ReportService:
    return ReportService(attendance_service, student_service, subject_service)


@pytest.fixture
def make_row():
    return _row


@pytest.fixture
def make_student():
    return _student
