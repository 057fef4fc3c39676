"""Process-wide repositories and the FastAPI dependencies exposing services.

Routes receive services through ``Depends(get_candidate_service)`` and
``Depends(get_employee_service)``; tests swap them via
``app.dependency_overrides``.
"""

from __future__ import annotations

from app.repositories.candidate_repository import CandidateRepository
from app.repositories.employee_repository import EmployeeRepository
from app.services.candidate_service import CandidateService
from app.services.employee_service import EmployeeService

_candidate_repository = CandidateRepository()
_employee_repository = EmployeeRepository()


def get_candidate_service() -> CandidateService:
    return CandidateService(_candidate_repository)


def get_employee_service() -> EmployeeService:
    return EmployeeService(_employee_repository)
