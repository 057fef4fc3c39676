"""In-memory storage for candidates."""

from __future__ import annotations

from app.models.candidate import Candidate
from app.repositories.in_memory import InMemoryRepository


class CandidateRepository(InMemoryRepository[Candidate]):
    """Candidate collection; stamps ``applied_date`` on create."""

    resource_name = "Candidate"
    created_field = "applied_date"
    duplicate_email_message = "A candidate with email {email} already exists"

    def search_by_skill(self, skill: str) -> list[Candidate]:
        """Return candidates listing ``skill`` (case-insensitive), in id order."""
        return [c for c in self.list_all() if c.has_skill(skill)]
