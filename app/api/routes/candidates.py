from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from app.api.dependencies import get_candidate_service
from app.schemas.candidate import (
    CandidateCreateRequest,
    CandidateResponse,
    CandidateUpdateRequest,
)
from app.schemas.errors import error_responses
from app.schemas.pagination import PagedResponse
from app.services.candidate_service import CandidateService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/candidates", tags=["Candidates"])

CandidateServiceDep = Annotated[CandidateService, Depends(get_candidate_service)]


@router.get(
    "",
    response_model=PagedResponse[CandidateResponse],
    responses=error_responses(400),
)
def list_candidates(
    service: CandidateServiceDep,
    page_number: int = Query(1, description="1-based page index."),
    page_size: int | None = Query(None, description="Items per page (default 10, max 100)."),
    sort_by: str | None = Query(
        None,
        description="first_name, last_name, email, experience_years or applied_date.",
    ),
    sort_order: str | None = Query("asc", description="'asc' or 'desc'."),
) -> PagedResponse[CandidateResponse]:
    """List candidates with pagination and optional sorting."""
    logger.info(
        "candidates.list",
        extra={"page_number": page_number, "page_size": page_size, "sort_by": sort_by},
    )
    return service.list_candidates(page_number, page_size, sort_by, sort_order)


@router.get(
    "/search",
    response_model=list[CandidateResponse],
    responses=error_responses(400),
)
def search_candidates(
    service: CandidateServiceDep,
    skill: str | None = Query(None, description="Skill to match (case-insensitive)."),
) -> list[CandidateResponse]:
    """Find candidates that list the given skill.

    Declared before ``/{candidate_id}`` so "search" is not read as an id.
    """
    logger.info("candidates.search", extra={"skill": skill})
    return service.search_by_skill(skill)


@router.get(
    "/{candidate_id}",
    response_model=CandidateResponse,
    name="get_candidate",
    responses=error_responses(400, 404),
)
def get_candidate(candidate_id: int, service: CandidateServiceDep) -> CandidateResponse:
    logger.info("candidates.get", extra={"candidate_id": candidate_id})
    return service.get_by_id(candidate_id)


@router.post(
    "",
    response_model=CandidateResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400),
)
def create_candidate(
    payload: CandidateCreateRequest,
    request: Request,
    response: Response,
    service: CandidateServiceDep,
) -> CandidateResponse:
    """Create a candidate; the response carries a Location header."""
    candidate = service.create(payload)
    response.headers["Location"] = str(request.url_for("get_candidate", candidate_id=candidate.id))
    return candidate


@router.put(
    "/{candidate_id}",
    response_model=CandidateResponse,
    responses=error_responses(400, 404),
)
def update_candidate(
    candidate_id: int,
    payload: CandidateUpdateRequest,
    service: CandidateServiceDep,
) -> CandidateResponse:
    """Replace a candidate (full update); the applied date is preserved."""
    logger.info("candidates.update", extra={"candidate_id": candidate_id})
    return service.update(candidate_id, payload)


@router.delete(
    "/{candidate_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(404),
)
def delete_candidate(candidate_id: int, service: CandidateServiceDep) -> Response:
    logger.info("candidates.delete", extra={"candidate_id": candidate_id})
    service.delete(candidate_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
