from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.cache import QueryCache
from ..common.validators import (
    optional_phone,
    require_email,
    require_int_range,
    require_max_length,
    require_min_length,
    require_non_empty,
)
from ..core import constants as c
from ..core.exceptions import ConflictError, ValidationError
from .model import Student, StudentRegistration
from .repository import StudentRepository

logger = logging.getLogger(__name__)

DUPLICATE_STUDENT_MESSAGE = "A student with this roll number or email already exists"


def validate_registration(
    *,
    roll_number: Optional[str],
    name: Optional[str],
    email: Optional[str],
    phone: Optional[str],
    department: Optional[str],
    year: object,
) -> StudentRegistration:
    """Validate registration fields in form order.

    Only the first violated rule is reported.
    """

    roll_number = require_non_empty(roll_number, "Roll number")
    require_max_length(roll_number, "Roll number", c.ROLL_NUMBER_MAX_LEN)

    name = require_min_length(name, f"Name must be at least {c.NAME_MIN_LEN} characters", c.NAME_MIN_LEN)
    require_max_length(name, "Name", c.NAME_MAX_LEN)

    email = require_email(email)
    require_max_length(email, "Email", c.EMAIL_MAX_LEN)

    phone = optional_phone(phone)
    if phone is not None:
        require_max_length(phone, "Phone number", c.PHONE_MAX_LEN)

    department = require_min_length(department, "Department is required", c.DEPARTMENT_MIN_LEN)
    require_max_length(department, "Department", c.DEPARTMENT_MAX_LEN)

    year = require_int_range(year, "Year", c.MIN_YEAR, c.MAX_YEAR)

    return StudentRegistration(
        roll_number=roll_number,
        name=name,
        email=email,
        phone=phone,
        department=department,
        year=year,
    )


class StudentService:
    """Use case: register and list students."""

    def __init__(self, students: StudentRepository, *, cache: Optional[QueryCache] = None):
        self._students = students
        self._cache = cache or QueryCache()

    def register(
        self,
        *,
        roll_number: Optional[str],
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
        department: Optional[str],
        year: object,
    ) -> int:
        registration = validate_registration(
            roll_number=roll_number,
            name=name,
            email=email,
            phone=phone,
            department=department,
            year=year,
        )

        try:
            student_id = self._students.create(registration)
        except ConflictError as e:
            logger.info("duplicate student rejected roll_number=%s: %s", registration.roll_number, e)
            raise ConflictError(DUPLICATE_STUDENT_MESSAGE) from e

        self._cache.invalidate(c.CACHE_STUDENTS)
        logger.info("registered student id=%s roll_number=%s", student_id, registration.roll_number)
        return student_id

    def list_students(self, *, order_by: str = "roll_number") -> Sequence[Student]:
        if order_by not in c.STUDENT_ORDERINGS:
            raise ValidationError("order_by must be one of: " + ", ".join(c.STUDENT_ORDERINGS))
        return self._cache.get_or_load(
            c.CACHE_STUDENTS,
            ("all", order_by),
            lambda: tuple(self._students.list_all(order_by=order_by)),
        )

    def get_student(self, student_id: int) -> Optional[Student]:
        return self._students.get_by_id(int(student_id))
