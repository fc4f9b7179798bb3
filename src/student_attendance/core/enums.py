from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles allowed to sign in and mark attendance."""

    ADMIN = "admin"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
