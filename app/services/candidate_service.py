"""Candidate service: business rules between the routes and the repository.

Handles:
- mapping request schemas to entities and entities to responses
- not-found and duplicate-email errors
- sorting and pagination of the candidate list
- skill search
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from app.core.config import settings
from app.core.errors import NotFoundAppError, ValidationAppError
from app.models.candidate import Candidate
from app.repositories.candidate_repository import CandidateRepository
from app.schemas.candidate import (
    CandidateCreateRequest,
    CandidateResponse,
    CandidateUpdateRequest,
)
from app.schemas.pagination import PagedResponse

logger = logging.getLogger(__name__)

RESOURCE = "Candidate"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

# Keys are normalized: lower-case, underscores removed ("firstName" -> "firstname")
_SORT_KEYS: dict[str, Callable[[Candidate], Any]] = {
    "firstname": lambda c: c.first_name.casefold(),
    "lastname": lambda c: c.last_name.casefold(),
    "email": lambda c: c.email.casefold(),
    "experienceyears": lambda c: c.experience_years,
    "applieddate": lambda c: c.applied_date or _EPOCH,
}


def _normalize_sort_field(sort_by: str) -> str:
    return sort_by.replace("_", "").strip().lower()


def sort_candidates(
    candidates: list[Candidate],
    sort_by: str | None,
    sort_order: str | None = "asc",
) -> list[Candidate]:
    """Sort candidates by a supported field.

    Args:
        candidates: Candidates in repository (id) order.
        sort_by: Field name; unknown or empty values keep the input order.
        sort_order: "desc" (any case) for descending, anything else ascending.

    Returns:
        A new, stably sorted list.
    """
    if not sort_by or not sort_by.strip():
        return list(candidates)

    key = _SORT_KEYS.get(_normalize_sort_field(sort_by))
    if key is None:
        logger.info("candidates.sort_ignored", extra={"sort_by": sort_by})
        return list(candidates)

    descending = (sort_order or "").strip().lower() == "desc"
    return sorted(candidates, key=key, reverse=descending)


class CandidateService:
    """CRUD, listing and search operations over candidates.

    Attributes:
        repository: Storage for candidate entities.
    """

    def __init__(self, repository: CandidateRepository) -> None:
        self.repository = repository

    def _validate_paging(self, page_number: int, page_size: int) -> None:
        """Reject page numbers below 1 and page sizes outside the allowed range.

        Raises:
            ValidationAppError: If either value is out of range.
        """
        if page_number < 1:
            raise ValidationAppError(
                code="invalid_page_number",
                message="Page number must be 1 or greater.",
                details={"field": "page_number", "min_value": 1, "actual_value": page_number},
            )

        max_page_size = settings.app.max_page_size
        if page_size < 1 or page_size > max_page_size:
            raise ValidationAppError(
                code="invalid_page_size",
                message=f"Page size must be between 1 and {max_page_size}.",
                details={
                    "field": "page_size",
                    "min_value": 1,
                    "max_value": max_page_size,
                    "actual_value": page_size,
                },
            )

    def get_by_id(self, candidate_id: int) -> CandidateResponse:
        """Return one candidate.

        Raises:
            NotFoundAppError: If no candidate has this id.
        """
        candidate = self.repository.get_by_id(candidate_id)
        if candidate is None:
            raise NotFoundAppError.for_resource(RESOURCE, candidate_id)
        return CandidateResponse.from_entity(candidate)

    def list_candidates(
        self,
        page_number: int = 1,
        page_size: int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = "asc",
    ) -> PagedResponse[CandidateResponse]:
        """Return one page of candidates, optionally sorted.

        Args:
            page_number: 1-based page index.
            page_size: Items per page; defaults to the configured page size.
            sort_by: Field to sort by (first_name, last_name, email,
                experience_years, applied_date).
            sort_order: "asc" or "desc".

        Returns:
            PagedResponse with the requested slice and navigation metadata.

        Raises:
            ValidationAppError: If paging parameters are out of range.
        """
        if page_size is None:
            page_size = settings.app.default_page_size
        self._validate_paging(page_number, page_size)

        candidates = sort_candidates(self.repository.list_all(), sort_by, sort_order)

        return PagedResponse[CandidateResponse].from_items(
            [CandidateResponse.from_entity(c) for c in candidates],
            page_number=page_number,
            page_size=page_size,
        )

    def create(self, request: CandidateCreateRequest) -> CandidateResponse:
        """Store a new candidate.

        Raises:
            ValidationAppError: If the email is already taken.
        """
        created = self.repository.create(request.to_entity())
        logger.info("candidates.created", extra={"candidate_id": created.id})
        return CandidateResponse.from_entity(created)

    def update(self, candidate_id: int, request: CandidateUpdateRequest) -> CandidateResponse:
        """Replace a candidate's data, keeping its id and applied date.

        Raises:
            NotFoundAppError: If no candidate has this id.
            ValidationAppError: If another candidate already uses the email.
        """
        updated = self.repository.update(candidate_id, request.to_entity())
        if updated is None:
            raise NotFoundAppError.for_resource(RESOURCE, candidate_id)
        logger.info("candidates.updated", extra={"candidate_id": candidate_id})
        return CandidateResponse.from_entity(updated)

    def delete(self, candidate_id: int) -> None:
        """Remove a candidate.

        Raises:
            NotFoundAppError: If no candidate has this id.
        """
        if not self.repository.delete(candidate_id):
            raise NotFoundAppError.for_resource(RESOURCE, candidate_id)
        logger.info("candidates.deleted", extra={"candidate_id": candidate_id})

    def search_by_skill(self, skill: str | None) -> list[CandidateResponse]:
        """Return candidates who list ``skill`` (case-insensitive).

        Raises:
            ValidationAppError: If skill is missing or blank.
        """
        if not skill or not skill.strip():
            raise ValidationAppError(
                code="skill_required",
                message="Skill parameter is required",
                details={"field": "skill"},
            )

        matches = self.repository.search_by_skill(skill.strip())
        logger.info("candidates.searched", extra={"match_count": len(matches)})
        return [CandidateResponse.from_entity(c) for c in matches]
