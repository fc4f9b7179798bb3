from __future__ import annotations

from typing import Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    def list_all(self) -> Sequence[Subject]:
        """Subjects ordered by name."""

        raise NotImplementedError
