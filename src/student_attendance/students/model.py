from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student."""

    student_id: int
    roll_number: str
    name: str
    email: str
    phone: Optional[str]
    department: str
    year: int
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class StudentRegistration:
    """Validated registration input, ready to be inserted."""

    roll_number: str
    name: str
    email: str
    phone: Optional[str]
    department: str
    year: int
