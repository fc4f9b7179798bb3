from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.cache import QueryCache
from .core.constants import LOW_ATTENDANCE_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.service import SubjectService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    cache: QueryCache

    users_repo: MySQLUserRepository
    students_repo: MySQLStudentRepository
    subjects_repo: MySQLSubjectRepository
    attendance_repo: MySQLAttendanceRepository

    auth_service: AuthService
    student_service: StudentService
    subject_service: SubjectService
    attendance_service: AttendanceService
    report_service: ReportService


def build_container(
    *,
    db_config: dict,
    cache_ttl_seconds: float = 0,
    low_attendance_threshold: int = LOW_ATTENDANCE_THRESHOLD,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    cache = QueryCache(ttl_seconds=cache_ttl_seconds)

    users_repo = MySQLUserRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    subjects_repo = MySQLSubjectRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    auth_service = AuthService(users_repo)
    student_service = StudentService(students_repo, cache=cache)
    subject_service = SubjectService(subjects_repo, cache=cache)
    attendance_service = AttendanceService(attendance_repo, student_service, auth_service, cache=cache)
    report_service = ReportService(
        attendance_service,
        student_service,
        subject_service,
        low_attendance_threshold=low_attendance_threshold,
    )

    return Container(
        conn=conn,
        cache=cache,
        users_repo=users_repo,
        students_repo=students_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        student_service=student_service,
        subject_service=subject_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )
