from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentRegistration


class StudentRepository(Protocol):
    """Repository interface for students.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self, *, order_by: str = "roll_number") -> Sequence[Student]:
        raise NotImplementedError

    def create(self, registration: StudentRegistration) -> int:
        """Insert a student; raises ConflictError on duplicate roll number/email."""

        raise NotImplementedError
