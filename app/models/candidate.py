"""Candidate domain entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

SENIOR_EXPERIENCE_YEARS = 5


@dataclass
class Candidate:
    """A job applicant as stored by the candidate repository.

    ``id`` and ``applied_date`` are owned by the repository: they are
    assigned on create and kept unchanged on update.
    """

    first_name: str
    last_name: str
    email: str
    phone: str = ""
    experience_years: int = 0
    skills: list[str] = field(default_factory=list)
    id: int = 0
    applied_date: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_senior(self) -> bool:
        return self.experience_years >= SENIOR_EXPERIENCE_YEARS

    def has_skill(self, skill: str) -> bool:
        """Case-insensitive exact match against the candidate's skills."""
        wanted = skill.casefold()
        return any(s.casefold() == wanted for s in self.skills)
