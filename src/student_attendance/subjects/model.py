from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Subject:
    """Reference data: a taught subject. ``code`` is the short display label."""

    subject_id: int
    name: str
    code: str
