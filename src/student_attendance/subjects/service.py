from __future__ import annotations

from typing import Optional, Sequence

from ..common.cache import QueryCache
from ..core import constants as c
from .model import Subject
from .repository import SubjectRepository


class SubjectService:
    """Read-only access to subjects through the query cache."""

    def __init__(self, subjects: SubjectRepository, *, cache: Optional[QueryCache] = None):
        self._subjects = subjects
        self._cache = cache or QueryCache()

    def list_subjects(self) -> Sequence[Subject]:
        return self._cache.get_or_load(c.CACHE_SUBJECTS, "all", lambda: tuple(self._subjects.list_all()))

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        for subject in self.list_subjects():
            if subject.subject_id == int(subject_id):
                return subject
        return None
